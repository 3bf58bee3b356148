from pathlib import Path

import pytest

from arsenal.data.errors import DataLoadError, RonSyntaxError
from arsenal.data.ron_loader import RonMap, RonStruct, RonTuple, RonUnit, load_ron, parse_ron
from arsenal.data.ron_writer import dumps


def test_parse_scalars() -> None:
    assert parse_ron("42") == 42
    assert parse_ron("-1.5") == -1.5
    assert parse_ron("1_000") == 1000
    assert parse_ron("2e3") == 2000.0
    assert parse_ron("true") is True
    assert parse_ron("false") is False
    assert parse_ron('"a\\"b\\n"') == 'a"b\n'
    assert parse_ron('"\\u{e9}"') == "é"


def test_integer_and_float_are_distinct() -> None:
    assert isinstance(parse_ron("2"), int)
    assert isinstance(parse_ron("2.0"), float)


def test_parse_struct_variant_and_tuple_variant() -> None:
    assert parse_ron("Ray(damage: 240.0)") == RonStruct("Ray", {"damage": 240.0})
    assert parse_ron("Projectile(Plasma)") == RonTuple("Projectile", [RonUnit("Plasma")])
    assert parse_ron("Beam") == RonUnit("Beam")


def test_parse_anonymous_tuple_and_struct() -> None:
    assert parse_ron("(-1.0, 2.0)") == RonTuple(None, [-1.0, 2.0])
    assert parse_ron("(model: \"m.fbx\")") == RonStruct(None, {"model": "m.fbx"})
    assert parse_ron("()") == RonTuple(None, [])


def test_comments_and_trailing_commas_are_tolerated() -> None:
    text = """
    // leading comment
    {
        /* block /* nested */ comment */
        M4: [1, 2, 3,], // trailing
        Glock: (a: 1, b: "x",),
    }
    """
    value = parse_ron(text)

    assert value == RonMap(
        [
            (RonUnit("M4"), [1, 2, 3]),
            (RonUnit("Glock"), RonStruct(None, {"a": 1, "b": "x"})),
        ]
    )


def test_map_keeps_duplicate_keys_in_order() -> None:
    value = parse_ron("{A: 1, B: 2, A: 3}")

    assert isinstance(value, RonMap)
    assert [key.name for key, _ in value.entries] == ["A", "B", "A"]


def test_duplicate_struct_field_is_syntax_error() -> None:
    with pytest.raises(RonSyntaxError, match="duplicate field 'a'"):
        parse_ron("(a: 1, a: 2)")


@pytest.mark.parametrize(
    "text",
    [
        "(a: 1",
        '"unterminated',
        "[1 2]",
        "{A 1}",
        "/* open",
        "12abc",
        "1 2",
        "@",
        '"\\q"',
    ],
)
def test_malformed_input_raises_syntax_error(text: str) -> None:
    with pytest.raises(RonSyntaxError):
        parse_ron(text)


def test_syntax_error_reports_line_and_column() -> None:
    with pytest.raises(RonSyntaxError) as excinfo:
        parse_ron("(\n    a: 1,\n    b: ?,\n)", source="weapons.ron")

    assert excinfo.value.line == 3
    assert excinfo.value.column == 8
    assert str(excinfo.value).startswith("weapons.ron:3:8:")


def test_load_ron_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(DataLoadError, match="not found"):
        load_ron(tmp_path / "missing.ron")


def test_dumps_output_reparses_to_same_value() -> None:
    value = RonStruct(
        None,
        {
            "map": RonMap(
                [
                    (
                        RonUnit("RailGun"),
                        RonStruct(
                            None,
                            {
                                "sounds": ["a.ogg", 'quote"d\n'],
                                "projectile": RonStruct("Ray", {"damage": 240.0}),
                                "kind": RonTuple("Projectile", [RonUnit("Plasma")]),
                                "range": RonTuple(None, [-1.0, 1e-05]),
                                "count": 10,
                                "flag": False,
                            },
                        ),
                    )
                ]
            )
        },
    )

    assert parse_ron(dumps(value)) == value


def test_dumps_writes_floats_with_fraction() -> None:
    assert dumps(2.0) == "2.0\n"
    assert dumps(RonTuple(None, [1, 2.5])) == "(1, 2.5)\n"


def test_dumps_rejects_non_finite_floats() -> None:
    with pytest.raises(ValueError):
        dumps(float("inf"))
