from drafting.variables import (
    TemplateVariable,
    extract_variables,
    find_placeholders,
    humanize_label,
    parse_template_json,
    reconcile_placeholders,
)


def test_parse_template_json_accepts_string_and_dict():
    assert parse_template_json('{"variables": []}') == {"variables": []}
    assert parse_template_json({"a": 1}) == {"a": 1}


def test_parse_template_json_bad_input_is_empty():
    assert parse_template_json("{not json") == {}
    assert parse_template_json("[1, 2]") == {}
    assert parse_template_json(None) == {}
    assert parse_template_json(42) == {}


def test_extract_variables_defaults():
    tj = {"variables": [
        {"variable_name": "party_a", "value": "Asha", "label": "Party A"},
        {"variable_name": "rent", "editable": False, "type": "number"},
        {"label": "no name"},
    ]}
    out = extract_variables(tj)
    assert set(out) == {"party_a", "rent"}
    assert out["party_a"] == TemplateVariable(value="Asha", editable=True, type="text", label="Party A")
    assert out["rent"].editable is False
    assert out["rent"].label == "rent"


def test_find_placeholders_distinct_in_order():
    html = "{{ b }} {{a}} {{b}} {{}} {{c_d}}"
    assert find_placeholders(html) == ["b", "a", "c_d"]


def test_humanize_label():
    assert humanize_label("party_a_name") == "Party A Name"


def test_reconcile_adds_only_missing():
    existing = {"party_a": TemplateVariable(value="X", label="Party A")}
    merged, added = reconcile_placeholders("{{party_a}} {{start_date}}", existing)
    assert added == ["start_date"]
    assert merged["party_a"].value == "X"
    assert merged["start_date"] == TemplateVariable(value="", editable=True, type="text", label="Start Date")
    assert "start_date" not in existing
