"""Tests for the Fractalizer resolver using plain in-memory entities."""

from dataclasses import dataclass, field
from typing import List, Optional

import pytest

from fractalizer.errors import (
    MalformedSelectionError,
    MaxDepthExceededError,
    UndeclaredIncludeError,
    UnknownKindError,
)
from fractalizer.transform import Fractalizer, Include, Transformer, TransformerRegistry, parse_includes


@dataclass
class UserEntity:
    id: int
    name: str
    comments: List["CommentEntity"] = field(default_factory=list)


@dataclass
class CommentEntity:
    id: int
    body: str
    author: Optional[UserEntity] = None


@dataclass
class PostEntity:
    id: int
    slug: str
    title: str
    author: Optional[UserEntity] = None
    comments: List[CommentEntity] = field(default_factory=list)


class UserT(Transformer):
    kind = "User"
    available_includes = {"comments": Include.collection("Comment")}

    def transform(self, user):
        return {"id": user.id, "name": user.name}


class CommentT(Transformer):
    kind = "Comment"
    available_includes = {"author": Include.item("User")}

    def transform(self, comment):
        return {"id": comment.id, "body": comment.body}


class PostT(Transformer):
    kind = "Post"
    available_includes = {
        "author": Include.item("User"),
        "comments": Include.collection("Comment"),
    }

    def transform(self, post):
        return {"id": post.id, "slug": post.slug, "title": post.title}


class ExplodingT(Transformer):
    kind = "Post"
    available_includes = {"author": Include.item("User")}

    def transform(self, post):
        if post.id == 99:
            raise RuntimeError("cannot transform post 99")
        return {"id": post.id}


@pytest.fixture
def registry():
    registry = TransformerRegistry()
    registry.add(UserT())
    registry.add(CommentT())
    registry.add(PostT())
    registry.check()
    return registry


@pytest.fixture
def fractalizer(registry):
    return Fractalizer(registry)


@pytest.fixture
def graph():
    ada = UserEntity(id=1, name="Ada")
    grace = UserEntity(id=2, name="Grace")
    x = UserEntity(id=6, name="X")
    c1 = CommentEntity(id=10, body="First!", author=ada)
    c2 = CommentEntity(id=11, body="Second", author=grace)
    ada.comments = [c1]
    grace.comments = [c2]
    post = PostEntity(id=3, slug="a", title="T", author=x, comments=[c1, c2])
    return {"post": post, "ada": ada, "grace": grace, "x": x, "c1": c1, "c2": c2}


def test_round_trip_post_with_author(fractalizer, graph):
    """Test the canonical Post + author scenario, including key order."""
    envelope = fractalizer.item(graph["post"], "Post", "author")

    assert envelope == {
        "data": {
            "id": 3,
            "slug": "a",
            "title": "T",
            "author": {"data": {"id": 6, "name": "X"}},
        }
    }
    assert list(envelope["data"]) == ["id", "slug", "title", "author"]


def test_empty_tree_returns_leaf_only(fractalizer, graph):
    """Test that no includes yields exactly the transform output."""
    envelope = fractalizer.item(graph["post"], "Post", None)

    assert envelope == {"data": {"id": 3, "slug": "a", "title": "T"}}


def test_single_include_is_never_a_sequence(fractalizer, graph):
    """Test single-item includes nest as one {data: {...}} object."""
    node = fractalizer.resolve(graph["c1"], "Comment", parse_includes("author"))

    assert isinstance(node["author"]["data"], dict)
    assert node["author"] == {"data": {"id": 1, "name": "Ada"}}


def test_collection_include_preserves_accessor_order(fractalizer, graph):
    """Test collection includes nest as {data: [...]} in accessor order."""
    post = graph["post"]
    post.comments = [graph["c2"], graph["c1"]]

    node = fractalizer.resolve(post, "Post", parse_includes("comments"))

    assert node["comments"] == {
        "data": [
            {"id": 11, "body": "Second"},
            {"id": 10, "body": "First!"},
        ]
    }


def test_nested_path_resolves_each_comment_author(fractalizer, graph):
    """Test comments.author: two levels of {data} wrapping, right author per comment."""
    envelope = fractalizer.item(graph["post"], "Post", "comments.author")

    comments = envelope["data"]["comments"]["data"]
    assert [c["id"] for c in comments] == [10, 11]
    assert comments[0]["author"] == {"data": {"id": 1, "name": "Ada"}}
    assert comments[1]["author"] == {"data": {"id": 2, "name": "Grace"}}
    assert "author" not in envelope["data"]


def test_includes_follow_client_order_after_fields(fractalizer, graph):
    """Test includes are attached after fields, in the order the client listed them."""
    node = fractalizer.resolve(graph["post"], "Post", parse_includes("comments,author"))

    assert list(node) == ["id", "slug", "title", "comments", "author"]

    node = fractalizer.resolve(graph["post"], "Post", parse_includes("author,comments"))

    assert list(node) == ["id", "slug", "title", "author", "comments"]


def test_missing_single_relation_resolves_to_null(fractalizer, graph):
    """Test a single include with no related entity renders {data: None}."""
    post = graph["post"]
    post.author = None

    node = fractalizer.resolve(post, "Post", parse_includes("author"))

    assert node["author"] == {"data": None}


def test_empty_collection_include(fractalizer, graph):
    """Test a collection include with no members renders {data: []}."""
    post = graph["post"]
    post.comments = []

    node = fractalizer.resolve(post, "Post", parse_includes("comments.author"))

    assert node["comments"] == {"data": []}


def test_collection_root_preserves_order_and_duplicates(fractalizer, graph):
    """Test collection roots resolve every member in order, without dedupe."""
    post = graph["post"]
    other = PostEntity(id=4, slug="b", title="U", author=graph["ada"])

    envelope = fractalizer.collection([other, post, other], "Post", "author")

    assert [p["id"] for p in envelope["data"]] == [4, 3, 4]
    assert envelope["data"][1]["author"]["data"]["id"] == 6
    assert "meta" not in envelope


def test_generator_root_resolves_as_collection(fractalizer, graph):
    """Test non-list iterables resolve member by member, in order."""
    post = graph["post"]
    other = PostEntity(id=4, slug="b", title="U", author=graph["ada"])

    nodes = fractalizer.resolve((p for p in [other, post]), "Post", parse_includes("author"))

    assert [n["id"] for n in nodes] == [4, 3]
    assert nodes[0]["author"] == {"data": {"id": 1, "name": "Ada"}}


def test_undeclared_include_fails(fractalizer, graph):
    """Test that requesting an undeclared include never silently omits it."""
    with pytest.raises(UndeclaredIncludeError) as exc_info:
        fractalizer.item(graph["post"], "Post", "editor")

    error = exc_info.value
    assert error.kind == "Post"
    assert error.include == "editor"
    assert error.available == ["author", "comments"]
    assert error.client_error is True


def test_undeclared_nested_include_reports_full_path(fractalizer, graph):
    """Test that nested typos are reported against the right kind and path."""
    with pytest.raises(UndeclaredIncludeError) as exc_info:
        fractalizer.item(graph["post"], "Post", "comments.editor")

    assert exc_info.value.kind == "Comment"
    assert exc_info.value.path == "comments.editor"


def test_undeclared_include_fails_in_direct_resolve(fractalizer, graph):
    """Test resolve() rejects undeclared includes even without validate()."""
    with pytest.raises(UndeclaredIncludeError):
        fractalizer.resolve(graph["post"], "Post", parse_includes("editor"))


def test_validation_happens_before_any_entity_is_read(fractalizer):
    """Test rejected selections never touch the entity."""

    class Untouchable:
        def __getattr__(self, name):
            raise AssertionError(f"entity was read: {name}")

    with pytest.raises(UndeclaredIncludeError):
        fractalizer.item(Untouchable(), "Post", "author,editor")
    with pytest.raises(MalformedSelectionError):
        fractalizer.item(Untouchable(), "Post", "comments..author")


def test_unknown_root_kind_fails(fractalizer, graph):
    """Test resolving an unregistered kind fails with UnknownKindError."""
    with pytest.raises(UnknownKindError) as exc_info:
        fractalizer.item(graph["post"], "Article")

    assert exc_info.value.kind == "Article"
    assert exc_info.value.client_error is False


def test_max_depth_rejects_deep_selection(registry, graph):
    """Test max depth 2 with a path of length 3 fails before resolving."""
    fractalizer = Fractalizer(registry, max_depth=2)

    with pytest.raises(MaxDepthExceededError) as exc_info:
        fractalizer.item(graph["post"], "Post", "comments.author.comments")

    assert exc_info.value.depth == 3
    assert exc_info.value.max_depth == 2


def test_max_depth_allows_selection_at_limit(registry, graph):
    """Test a path exactly as deep as max_depth resolves."""
    fractalizer = Fractalizer(registry, max_depth=2)

    envelope = fractalizer.item(graph["post"], "Post", "comments.author")

    assert envelope["data"]["comments"]["data"][0]["author"]["data"]["id"] == 1


def test_max_depth_guards_direct_recursion(registry, graph):
    """Test the recursion guard when resolve() is called without validate()."""
    fractalizer = Fractalizer(registry, max_depth=2)

    with pytest.raises(MaxDepthExceededError):
        fractalizer.resolve(graph["post"], "Post", parse_includes("comments.author.comments.author"))


def test_cyclic_graph_is_bounded_by_selection(fractalizer, graph):
    """Test that cycles in the entity graph only resolve as far as requested."""
    envelope = fractalizer.item(graph["post"], "Post", "comments.author.comments")

    ada = envelope["data"]["comments"]["data"][0]["author"]["data"]
    assert ada["comments"] == {"data": [{"id": 10, "body": "First!"}]}


def test_invalid_max_depth():
    """Test max_depth must be positive."""
    with pytest.raises(ValueError):
        Fractalizer(TransformerRegistry(), max_depth=0)


def test_one_failing_member_fails_whole_collection(graph):
    """Test there is no partial success for collections."""
    registry = TransformerRegistry()
    registry.add(UserT())
    registry.add(ExplodingT())
    fractalizer = Fractalizer(registry)
    posts = [graph["post"], PostEntity(id=99, slug="z", title="Z")]

    with pytest.raises(RuntimeError):
        fractalizer.collection(posts, "Post")


def test_transform_does_not_mutate_entities(fractalizer, graph):
    """Test resolution leaves the entity graph untouched."""
    post = graph["post"]
    before = (post.id, post.slug, post.title, post.author, list(post.comments))

    fractalizer.item(post, "Post", "author,comments.author")

    assert (post.id, post.slug, post.title, post.author, list(post.comments)) == before


def test_dict_entities_are_supported(fractalizer):
    """Test that mapping entities resolve relations by key."""

    class DictPostT(Transformer):
        kind = "Post"
        available_includes = {"author": Include.item("User")}

        def transform(self, post):
            return {"id": post["id"], "slug": post["slug"], "title": post["title"]}

    class DictUserT(Transformer):
        kind = "User"

        def transform(self, user):
            return {"id": user["id"], "name": user["name"]}

    registry = TransformerRegistry()
    registry.add(DictPostT())
    registry.add(DictUserT())
    post = {"id": 3, "slug": "a", "title": "T", "author": {"id": 6, "name": "X"}}

    envelope = Fractalizer(registry).item(post, "Post", "author")

    assert envelope["data"]["author"] == {"data": {"id": 6, "name": "X"}}


def test_callable_accessor(graph):
    """Test includes can use a callable accessor instead of an attribute name."""

    class TopCommentPostT(PostT):
        available_includes = {
            "top_comment": Include.item("Comment", accessor=lambda post: post.comments[0] if post.comments else None),
        }

    registry = TransformerRegistry()
    registry.add(UserT())
    registry.add(CommentT())
    registry.add(TopCommentPostT())

    envelope = Fractalizer(registry).item(graph["post"], "Post", "top_comment.author")

    top = envelope["data"]["top_comment"]["data"]
    assert top["id"] == 10
    assert top["author"]["data"]["name"] == "Ada"
