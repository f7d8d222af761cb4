"""Tests for jsonapi_vanilla.parser.schema."""

from __future__ import annotations

import pytest

from jsonapi_vanilla.parser.schema import (
    Schema,
    SchemaRegistry,
    class_name_for,
    identifier_for,
)


class TestIdentifierFor:
    """Member names normalise to snake_case identifiers."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("first-name", "first_name"),
            ("lastName", "last_name"),
            ("HTMLContent", "html_content"),
            ("created_at", "created_at"),
            ("body", "body"),
            ("version2Beta", "version2_beta"),
            ("already-snake_case", "already_snake_case"),
        ],
    )
    def test_normalises(self, name: str, expected: str) -> None:
        assert identifier_for(name) == expected

    def test_deterministic(self) -> None:
        assert identifier_for("lastName") == identifier_for("lastName")

    def test_dash_and_camel_forms_collide(self) -> None:
        assert identifier_for("first-name") == identifier_for("firstName")


class TestClassNameFor:
    @pytest.mark.parametrize(
        ("type_name", "expected"),
        [
            ("articles", "Articles"),
            ("blog-posts", "BlogPosts"),
            ("people", "People"),
            ("a", "A"),
            ("---", "Resource"),
        ],
    )
    def test_class_names(self, type_name: str, expected: str) -> None:
        assert class_name_for(type_name) == expected


class TestSchema:
    def test_implicit_fields(self) -> None:
        schema = Schema("articles")
        assert "id" in schema
        assert "type" in schema
        assert schema.class_name == "Articles"

    def test_add(self) -> None:
        schema = Schema("articles")
        schema.add("title")
        assert "title" in schema
        assert "body" not in schema


class TestSchemaRegistry:
    """Schema growth per type within one registry."""

    def test_register_normalises_names(self) -> None:
        registry = SchemaRegistry()
        schema = registry.register_fields("people", ["first-name", "lastName"])
        assert schema.fields == {"id", "type", "first_name", "last_name"}

    def test_register_is_idempotent(self) -> None:
        once = SchemaRegistry()
        once.register_fields("people", ["twitter"])

        twice = SchemaRegistry()
        twice.register_fields("people", ["twitter"])
        twice.register_fields("people", ["twitter"])

        assert once.schema_for("people").fields == twice.schema_for("people").fields

    def test_schema_never_shrinks(self) -> None:
        registry = SchemaRegistry()
        registry.register_fields("comments", ["body", "author"])
        registry.register_fields("comments", ["body"])
        assert {"body", "author"} <= registry.schema_for("comments").fields

    def test_schema_for_returns_same_instance(self) -> None:
        registry = SchemaRegistry()
        assert registry.schema_for("people") is registry.schema_for("people")

    def test_types_in_first_seen_order(self) -> None:
        registry = SchemaRegistry()
        registry.register_fields("people", [])
        registry.register_fields("comments", [])
        registry.register_fields("people", ["name"])
        assert registry.types() == ["people", "comments"]
        assert len(registry) == 2
        assert "people" in registry
        assert registry.get("articles") is None

    def test_registries_are_independent(self) -> None:
        first = SchemaRegistry()
        second = SchemaRegistry()
        first.register_fields("people", ["name"])
        second.register_fields("people", ["email"])
        assert "email" not in first.schema_for("people")
        assert "name" not in second.schema_for("people")
