"""
Tests for the declarative form elements.
"""

from solarprognose.ui import (
    HtmlInputType,
    HtmlWidth,
    UIInputElement,
    UIList,
    UISelectElement,
    ValueText,
)


def test_value_text_defaults_to_value():
    """
    Without a text the option shows its value.
    """
    assert ValueText("mosmix").text == "mosmix"
    assert ValueText("", "default").text == "default"


def test_ui_list_to_dicts():
    """
    Elements serialize to plain dictionaries with enum values.
    """
    ui_list = UIList()
    ui_list.add_element(
        UIInputElement(
            name="elementid",
            label="Element id",
            input_type=HtmlInputType.NUMBER,
            column_width=HtmlWidth.HALF,
            step="any",
        )
    )
    ui_list.add_element(
        UISelectElement(name="algorithm", label="Algorithm", options=[ValueText("own-v1")])
    )

    dicts = ui_list.to_dicts()
    assert dicts[0]["input_type"] == "number"
    assert dicts[0]["column_width"] == "half"
    assert dicts[0]["element"] == "input"
    assert dicts[1]["options"] == [{"value": "own-v1", "text": "own-v1"}]
    assert ui_list.get_element("algorithm").label == "Algorithm"
    assert ui_list.get_element("missing") is None
