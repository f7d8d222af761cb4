"""Tests for jsonapi_vanilla.document."""

from __future__ import annotations

from typing import Any

import pytest

from jsonapi_vanilla.document import Document, ResourceSet
from jsonapi_vanilla.parser import build, is_stub


class TestFind:
    def test_find_known(self, articles_doc: Document) -> None:
        person = articles_doc.find("people", "9")
        assert person.first_name == "Dan"
        assert person.twitter == "dgeb"

    def test_find_unknown_returns_none(self, articles_doc: Document) -> None:
        assert articles_doc.find("people", "404") is None
        assert articles_doc.find("unicorns", "1") is None

    def test_find_stub(self, articles_doc: Document) -> None:
        stub = articles_doc.find("people", "2")
        assert stub is not None
        assert is_stub(stub)


class TestFindAll:
    def test_counts_distinct_pairs(self, articles_doc: Document) -> None:
        assert len(articles_doc.find_all("comments")) == 2
        assert len(articles_doc.find_all("articles")) == 1
        assert len(articles_doc.find_all("people")) == 2

    def test_unknown_type_is_empty(self, articles_doc: Document) -> None:
        result = articles_doc.find_all("unicorns")
        assert len(result) == 0
        assert list(result) == []

    def test_first_seen_order(self, articles_doc: Document) -> None:
        assert [c.id for c in articles_doc.find_all("comments")] == ["5", "12"]

    def test_re_iterable(self, articles_doc: Document) -> None:
        comments = articles_doc.find_all("comments")
        assert isinstance(comments, ResourceSet)
        assert list(comments) == list(comments)

    def test_indexing(self, articles_doc: Document) -> None:
        comments = articles_doc.find_all("comments")
        assert comments[0].body == "First!"
        assert comments[-1].body == "I like XML better"
        assert articles_doc.find("comments", "12") in comments


class TestSideTableViews:
    def test_views_are_read_only(self, articles_doc: Document) -> None:
        with pytest.raises(TypeError):
            articles_doc.links[articles_doc.data] = {}  # type: ignore[index]

    def test_links_for(self, articles_doc: Document) -> None:
        article = articles_doc.data[0]
        assert articles_doc.links_for(article) == {"self": "http://example.com/articles/1"}
        assert articles_doc.links_for(articles_doc.data)["next"].endswith("page[offset]=2")

    def test_rel_links_and_meta(self, articles_doc: Document) -> None:
        comments = articles_doc.data[0].comments
        links, meta = articles_doc.rel_links_and_meta(comments)
        assert links["self"] == "http://example.com/articles/1/relationships/comments"
        assert meta is None

    def test_rel_links_and_meta_unknown(self, articles_doc: Document) -> None:
        assert articles_doc.rel_links_and_meta(list(articles_doc.data[0].comments)) is None

    def test_to_one_relationship_keyed_by_target(self, articles_doc: Document) -> None:
        # A to-one relationship's links are keyed by the target resource itself.
        author = articles_doc.data[0].author
        assert author in articles_doc.rel_links

    def test_original_keys_for(self, articles_doc: Document) -> None:
        person = articles_doc.find("people", "9")
        assert articles_doc.original_keys_for(person) == {
            "first-name": "Dan",
            "last-name": "Gebhardt",
            "twitter": "dgeb",
        }

    def test_original_keys_for_stub_is_none(self, articles_doc: Document) -> None:
        assert articles_doc.original_keys_for(articles_doc.find("people", "2")) is None

    def test_root_links_and_meta(self, articles_doc: Document) -> None:
        assert articles_doc.root_links["last"].endswith("page[offset]=10")
        assert articles_doc.root_meta == {"from": "http://jsonapi.org"}


class TestIntrospection:
    def test_types(self, articles_doc: Document) -> None:
        assert articles_doc.types() == ["people", "comments", "articles"]

    def test_schema(self, articles_doc: Document) -> None:
        schema = articles_doc.schema("people")
        assert schema.fields == {"id", "type", "first_name", "last_name", "twitter"}
        assert articles_doc.schema("unicorns") is None

    def test_repr(self, articles_doc: Document, errors_raw: dict[str, Any]) -> None:
        assert repr(articles_doc) == "<Document data=many resources=5 errors=0>"
        assert repr(build(errors_raw)) == "<Document data=absent resources=0 errors=1>"
