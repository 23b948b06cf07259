"""Tests for steplib.parsers.parameters."""

from __future__ import annotations

from steplib.models import ParameterInfo, StepCategory, StepDefinition
from steplib.parsers.parameters import (
    ParameterClassifier,
    base_type,
    describe_type,
    extract_parameter_types,
    extract_placeholders,
    generate_parameter_documentation,
    generate_placeholder,
    is_custom_type,
    parse_parameters,
    split_parameters,
    validate_parameter_consistency,
)


def _step(pattern: str, *params: tuple[str, str], category: StepCategory = StepCategory.WHEN) -> StepDefinition:
    return StepDefinition(
        category=category,
        pattern=pattern,
        parameters=[ParameterInfo(java_type=java_type, name=name) for java_type, name in params],
    )


def test_placeholders_come_from_step_text_in_order() -> None:
    params = ParameterClassifier().classify("String a, int b", "User enters {string} in {int} field")

    assert [param.placeholder for param in params] == ["{string}", "{int}"]
    assert [param.name for param in params] == ["a", "b"]
    assert not any(param.is_custom_type for param in params)
    assert not any(param.is_data_table for param in params)


def test_text_placeholders_win_over_declared_types() -> None:
    params = ParameterClassifier().classify("int count", "the basket holds {string} items")

    assert params[0].placeholder == "{string}"


def test_placeholder_synthesized_from_custom_type() -> None:
    params = ParameterClassifier().classify("CustomBean data", "User waits")

    assert len(params) == 1
    assert params[0].placeholder == "{CustomBean}"
    assert params[0].is_custom_type is True
    assert params[0].is_data_table is False


def test_placeholder_synthesized_after_queue_is_exhausted() -> None:
    params = ParameterClassifier().classify(
        "String name, Integer age, boolean active", "user {string} is registered"
    )

    assert [param.placeholder for param in params] == ["{string}", "{int}", "{boolean}"]


def test_table_step_with_custom_bean_gets_no_placeholder() -> None:
    params = ParameterClassifier().classify(
        "FlightPlanBean data", "User creates flight plan with:"
    )

    assert params[0].is_data_table is True
    assert params[0].is_custom_type is True
    assert params[0].placeholder is None


def test_table_step_detects_collection_and_datatable_types() -> None:
    params = ParameterClassifier().classify(
        "DataTable table, List<String> rows, String note", "the following rows exist:  "
    )

    assert [param.is_data_table for param in params] == [True, True, False]
    assert [param.placeholder for param in params] == [None, None, "{string}"]
    assert params[0].is_custom_type is False
    assert params[1].is_custom_type is True


def test_non_table_step_never_flags_tables() -> None:
    params = ParameterClassifier().classify("DataTable table", "the following rows exist")

    assert params[0].is_data_table is False
    assert params[0].placeholder == "{DataTable}"


def test_generic_commas_are_split_naively() -> None:
    assert split_parameters("Map<String, String> values, int n") == [
        "Map<String",
        "String> values",
        "int n",
    ]
    parsed = parse_parameters("Map<String, String> values, int n")
    assert [(param.java_type, param.name) for param in parsed] == [("int", "n")]


def test_parse_parameters_skips_unmatched_entries() -> None:
    parsed = parse_parameters(" final String name , , List<Long> ids, garbage")

    assert [(param.java_type, param.name) for param in parsed] == [
        ("String", "name"),
        ("List<Long>", "ids"),
    ]


def test_extract_placeholders() -> None:
    assert extract_placeholders("{string} then {int} then {CustomBean}") == [
        "{string}",
        "{int}",
        "{CustomBean}",
    ]
    assert extract_placeholders("no tokens") == []


def test_type_helpers() -> None:
    assert base_type("List<Map<String, String>>") == "List"
    assert generate_placeholder("Character") == "{char}"
    assert generate_placeholder("List<String>") == "{List}"
    assert is_custom_type("FlightPlanBean")
    assert not is_custom_type("DataTable")
    assert not is_custom_type("long")
    assert not is_custom_type("java.time.LocalDate")


def test_describe_type_lookup() -> None:
    assert describe_type("String") == "String parameters for text values"
    assert describe_type("Integer") == "Integer numeric parameters"
    assert describe_type("double") == "Double precision numeric parameters"
    assert describe_type("char") == "Single character parameters"
    assert describe_type("List<String>") == "List collection parameters"
    assert describe_type("Map<String>") == "Map/dictionary parameters"
    assert describe_type("Set<Long>") == "Set collection parameters"
    assert describe_type("DataTable") == "Cucumber data table parameters"
    assert describe_type("FlightPlanBean") == "Custom parameter type: FlightPlanBean"
    assert describe_type("java.time.LocalDate") == "Parameter type: java.time.LocalDate"


def test_enhance_step_parameters_recomputes_flags() -> None:
    step = _step("plan with:", ("FlightPlanBean", "data"))
    step.parameters[0].placeholder = "{stale}"

    ParameterClassifier().enhance_step_parameters(step)

    assert step.parameters[0].placeholder is None
    assert step.parameters[0].is_data_table is True


def test_documentation_covers_every_declared_type() -> None:
    steps = [
        _step("a {string}", ("String", "value")),
        _step("b", ("FlightPlanBean", "plan"), ("String", "again")),
    ]

    assert extract_parameter_types(steps) == ["String", "FlightPlanBean"]
    assert generate_parameter_documentation(steps) == {
        "String": "String parameters for text values",
        "FlightPlanBean": "Custom parameter type: FlightPlanBean",
    }


def test_consistency_flags_patterns_with_differing_signatures() -> None:
    steps = [
        _step("user {string} logs in", ("String", "user")),
        _step("user {string} logs in", ("int", "user"), category=StepCategory.GIVEN),
        _step("two args {string} {int}", ("String", "a"), ("int", "b")),
        _step("two args {string} {int}", ("String", "x"), ("int", "y")),
    ]

    warnings = validate_parameter_consistency(steps)

    assert len(warnings) == 1
    assert "user {string} logs in" in warnings[0]
    assert "(String)" in warnings[0] and "(int)" in warnings[0]
