from __future__ import annotations

from declarations.models import (
    DocComment,
    FieldDecl,
    Marker,
    MethodDecl,
    TypeDecl,
    TypeRef,
)
from declarations.provider import DeclarationIndex
from extract.models import EnumProperty, TypedProperty
from extract.schema import SchemaExtractor, container_element_type, extract_schemas
from naming.translator import NameBasedTranslator
from parse.annotations import NameScope, parse_annotation
from rules.config import ExtractionConfig

STR = TypeRef(name="str", qualified_name="builtins.str")
INT = TypeRef(name="int", qualified_name="builtins.int")


def _ref(qualified_name: str, *args: TypeRef) -> TypeRef:
    return TypeRef(
        name=qualified_name.rsplit(".", 1)[-1],
        qualified_name=qualified_name,
        args=list(args),
    )


def _field(name: str, type_: TypeRef, text: str = "", **kwargs: object) -> FieldDecl:
    return FieldDecl(name=name, type=type_, comment=DocComment(text=text), **kwargs)


def _type(qualified_name: str, *fields: FieldDecl, **kwargs: object) -> TypeDecl:
    return TypeDecl(
        name=qualified_name.rsplit(".", 1)[-1],
        qualified_name=qualified_name,
        fields=list(fields),
        **kwargs,
    )


def _extract(index: DeclarationIndex, root: TypeRef, **config: object):
    return extract_schemas(
        index, root, NameBasedTranslator(), ExtractionConfig(**config)
    )


def test_extraction_is_idempotent() -> None:
    index = DeclarationIndex(
        [
            _type(
                "app.User",
                _field("name", STR),
                _field("address", _ref("app.Address")),
            ),
            _type("app.Address", _field("city", STR)),
        ]
    )
    extractor = SchemaExtractor(index, NameBasedTranslator())

    first = extractor.extract(_ref("app.User"))
    second = extractor.extract(_ref("app.User"))

    assert first == second
    assert first.ids() == ["User", "Address"]


def test_models_are_unique_by_translated_name_first_wins() -> None:
    index = DeclarationIndex(
        [
            _type(
                "app.Holder",
                _field("primary", _ref("app.a.User")),
                _field("legacy", _ref("app.b.User")),
            ),
            _type("app.a.User", _field("name", STR)),
            _type("app.b.User", _field("login", STR)),
        ]
    )

    models = _extract(index, _ref("app.Holder"))

    assert models.ids() == ["Holder", "User"]
    user = models.get("User")
    assert user is not None
    assert list(user.properties) == ["name"]


def test_cyclic_references_terminate() -> None:
    index = DeclarationIndex(
        [
            _type(
                "app.Node",
                _field("parent", _ref("app.Node")),
                _field("tree", _ref("app.Tree")),
            ),
            _type("app.Tree", _field("root", _ref("app.Node"))),
        ]
    )

    models = _extract(index, _ref("app.Node"))

    assert models.ids() == ["Node", "Tree"]


def test_superclass_members_merge_without_overwriting() -> None:
    index = DeclarationIndex(
        [
            _type("app.Base", _field("name", STR, "base name"), _field("id", INT)),
            _type(
                "app.Child",
                _field("name", STR, "child name"),
                bases=[_ref("app.Base")],
            ),
        ]
    )

    models = _extract(index, _ref("app.Child"))

    child = models.get("Child")
    assert child is not None
    assert list(child.properties) == ["name", "id"]
    assert child.properties["name"].description == "child name"
    assert "Base" not in models


def test_inheritance_cycle_in_bases_terminates() -> None:
    index = DeclarationIndex(
        [
            _type("app.A", _field("a", STR), bases=[_ref("app.B")]),
            _type("app.B", _field("b", STR), bases=[_ref("app.A")]),
        ]
    )

    models = _extract(index, _ref("app.A"))

    model = models.get("A")
    assert model is not None
    assert list(model.properties) == ["a", "b"]


def test_container_properties_use_element_type() -> None:
    user = _ref("app.User")
    index = DeclarationIndex(
        [
            _type(
                "app.Team",
                _field("members", _ref("builtins.list", user)),
                _field("by_login", _ref("app.UserMap", STR, user)),
                _field("scores", _ref("builtins.dict", STR, INT)),
            ),
            _type("app.User", _field("login", STR)),
        ]
    )

    models = _extract(index, _ref("app.Team"))

    team = models.get("Team")
    assert team is not None
    assert team.properties["members"] == TypedProperty(type="List", items="User")
    assert team.properties["by_login"] == TypedProperty(type="UserMap", items="User")
    assert team.properties["scores"] == TypedProperty(type="Map", items="integer")
    assert models.ids() == ["Team", "User"]


def test_container_element_type_rules() -> None:
    assert container_element_type(STR) is None
    assert container_element_type(_ref("builtins.list", INT)) == INT
    assert container_element_type(_ref("app.UserMap", STR, INT)) == INT
    # A map-like name with a single argument falls back to the first one.
    assert container_element_type(_ref("app.UserMap", STR)) == STR


def test_enum_members_become_enum_properties() -> None:
    index = DeclarationIndex(
        [
            _type("app.User", _field("status", _ref("app.Status"), "current status")),
            _type(
                "app.Status",
                bases=[_ref("enum.Enum")],
                enum_constants=["ACTIVE", "SUSPENDED"],
            ),
        ]
    )

    models = _extract(index, _ref("app.User"))

    user = models.get("User")
    assert user is not None
    assert user.properties["status"] == EnumProperty(
        values=["ACTIVE", "SUSPENDED"], description="current status"
    )
    assert "Status" not in models


def test_opaque_and_unresolved_types_are_not_modeled() -> None:
    index = DeclarationIndex(
        [
            _type(
                "app.User",
                _field("created", _ref("datetime.datetime")),
                _field("external", _ref("vendor.Blob")),
                _field("secret", _ref("app.Secret")),
            ),
            _type("app.Secret", _field("value", STR)),
        ]
    )

    models = _extract(index, _ref("app.User"), opaque_types=["app.Secret"])

    assert models.ids() == ["User"]
    user = models.get("User")
    assert user is not None
    assert user.properties["created"] == TypedProperty(type="Date")
    assert user.properties["external"] == TypedProperty(type="Blob")


def test_value_type_root_yields_no_models() -> None:
    assert len(_extract(DeclarationIndex(), STR)) == 0


def test_type_without_properties_is_not_modeled() -> None:
    index = DeclarationIndex([_type("app.Empty", _field("_hidden", STR))])

    assert len(_extract(index, _ref("app.Empty"))) == 0


def test_static_fields_and_non_getter_methods_are_skipped() -> None:
    decl = _type(
        "app.Config",
        _field("DEFAULT", STR, is_static=True),
        _field("name", STR),
        methods=[
            MethodDecl(name="get_size", owner="app.Config", return_type=INT),
            MethodDecl(
                name="resize",
                owner="app.Config",
                params=[],
                return_type=TypeRef(name="None", qualified_name="builtins.None"),
            ),
        ],
    )

    models = _extract(DeclarationIndex([decl]), _ref("app.Config"))

    config = models.get("Config")
    assert config is not None
    assert list(config.properties) == ["name", "size"]


def test_views_are_appended_to_property_description() -> None:
    view = Marker(
        name="JsonView",
        qualified_name="jaxrs.JsonView",
        args=["Public", "Admin"],
        source="'Public', 'Admin'",
    )
    index = DeclarationIndex(
        [_type("app.User", _field("email", STR, "Contact address.", markers=[view]))]
    )

    models = _extract(index, _ref("app.User"))

    user = models.get("User")
    assert user is not None
    assert user.properties["email"].description == (
        "Contact address.\nVIEWS: Public,Admin"
    )


def test_literal_fields_do_not_reach_named_classes() -> None:
    scope = NameScope(
        module_name="app",
        imports={"Literal": "typing.Literal"},
        local_types=frozenset({"Order", "User"}),
    )
    status = parse_annotation('Literal["open", "closed"]', scope).type
    kind = parse_annotation('Literal["User"]', scope).type
    index = DeclarationIndex(
        [
            _type("app.Order", _field("status", status), _field("kind", kind)),
            _type("app.User", _field("name", STR)),
        ]
    )

    models = _extract(index, _ref("app.Order"))

    assert models.ids() == ["Order"]
    order = models.get("Order")
    assert order is not None
    assert order.properties["status"] == TypedProperty(type="string")
    assert order.properties["kind"] == TypedProperty(type="string")
