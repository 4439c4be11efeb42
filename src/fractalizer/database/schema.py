from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True)
    is_admin = Column(Boolean, nullable=False, default=False)

    # Ordered by id so collection includes come back in a stable order
    posts = relationship("Post", back_populates="author", order_by="Post.id")
    comments = relationship("Comment", back_populates="author", order_by="Comment.id")


class Post(Base):
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True)
    slug = Column(String, nullable=False, unique=True, index=True)
    title = Column(String, nullable=False)
    body = Column(Text, nullable=True)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    published_at_utc = Column(String, nullable=True)  # ISO 8601 string, null for drafts

    author = relationship("User", back_populates="posts")
    comments = relationship("Comment", back_populates="post", order_by="Comment.id")


class Comment(Base):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True)
    post_id = Column(Integer, ForeignKey("posts.id"), nullable=False, index=True)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    body = Column(Text, nullable=False)
    created_at_utc = Column(String, nullable=True)  # ISO 8601 string

    post = relationship("Post", back_populates="comments")
    author = relationship("User", back_populates="comments")


def create_all(engine: Engine) -> None:
    Base.metadata.create_all(engine)
