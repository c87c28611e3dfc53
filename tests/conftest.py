# tests/conftest.py
import pytest

from treenorm import Entity, array_of, union_of


# --- Blog-style schemas: articles with an author and comments ---
@pytest.fixture
def blog():
    user = Entity("users")
    comment = Entity("comments")
    article = Entity("articles", defaults={"votes": 0})

    article.define({
        "author": user,
        "comments": array_of(comment),
    })
    comment.define({"commenter": user})
    return {"user": user, "comment": comment, "article": article}


# --- Library schemas: authors <-> books, declared on both sides ---
@pytest.fixture
def library():
    author = Entity("authors")
    book = Entity("books")
    author.define({"books": array_of(book)})
    book.define({"authors": array_of(author)})
    return {"author": author, "book": book}


# --- Polymorphic members: a group owner may be a user or another group ---
@pytest.fixture
def members():
    user = Entity("users")
    group = Entity("groups")
    member = union_of({"users": user, "groups": group}, schema_attribute="type")
    group.define({"owner": member})
    return {"user": user, "group": group, "member": member}


@pytest.fixture
def sample_article():
    return {
        "id": 1,
        "title": "Normalizing nested payloads",
        "author": {"id": 7, "name": "Dan"},
        "comments": [
            {"id": 100, "text": "nice", "commenter": {"id": 8, "name": "Ana"}},
            {"id": 101, "text": "agreed", "commenter": {"id": 7, "name": "Dan"}},
        ],
    }
