"""Tests for export API contracts."""

import json

import pytest

from fractalizer.api.context import build_context
from fractalizer.api.export import export_resource, fetch_resource
from fractalizer.envelope_schema import envelope_errors


@pytest.fixture
def ctx():
    return build_context({})


def test_export_item_json_preserves_field_order(blog, ctx):
    """Test exported JSON keeps transform order then include order."""
    output = export_resource(blog, ctx, "posts", resource_id=3, includes="comments,author")
    
    data = json.loads(output)["data"]
    assert list(data) == ["id", "slug", "title", "body", "published_at", "comments", "author"]


def test_export_collection_matches_api(blog, ctx):
    """Test export renders exactly what the API returns."""
    envelope = fetch_resource(blog, ctx, "users", includes="posts.comments")
    
    exported = json.loads(export_resource(blog, ctx, "users", includes="posts.comments"))
    
    assert exported == envelope


def test_exported_envelopes_match_schema(blog, ctx):
    """Test every export shape validates against the envelope schema."""
    for resource, resource_id, includes in [
        ("posts", None, "author,comments.author"),
        ("posts", 3, "comments.post.author"),
        ("posts", 4, "comments"),
        ("users", None, "comments.post"),
        ("users", 6, "posts.comments.author"),
    ]:
        envelope = json.loads(export_resource(blog, ctx, resource, resource_id=resource_id, includes=includes))
        assert envelope_errors(envelope) == [], (resource, resource_id, includes)


def test_export_to_file(blog, ctx, tmp_path):
    """Test writing the export to a file."""
    out = tmp_path / "posts.json"
    
    message = export_resource(blog, ctx, "posts", includes="author", out=out)
    
    assert message == f"Exported to {out}"
    assert len(json.loads(out.read_text(encoding="utf-8"))["data"]) == 2


def test_export_missing_item(blog, ctx):
    """Test a missing item exports as None."""
    assert export_resource(blog, ctx, "users", resource_id=404) is None


def test_export_unknown_resource(blog, ctx):
    """Test only known resources can be exported."""
    with pytest.raises(ValueError):
        export_resource(blog, ctx, "tags")
