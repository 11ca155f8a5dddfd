import pytest

from cubeserver.chat import ChatColor, color_from_json, translate, translate_console


def test_str_is_section_code():
    assert translate("&4") == str(ChatColor.DARK_RED) == "§4"
    assert translate("&c") == str(ChatColor.RED) == "§c"
    assert translate("&r") == f"{ChatColor.RESET}" == "§r"


def test_code_fields():
    gold = color_from_json("gold")
    color_code = gold.code
    assert gold is ChatColor.GOLD
    assert color_code.json == "gold"
    assert color_code.hex == "FFAA00"
    assert color_code.dec == "16755200"
    assert color_code.motd == r"\u00A76"


def test_translate_replaces_alt_codes():
    assert translate("&cRed") == "§cRed"
    assert translate("&4&lx") == "§4§lx"


def test_translate_leaves_plain_text_and_trailing_ampersand():
    assert translate("plain text") == "plain text"
    assert translate("trailing &") == "trailing &"


@pytest.mark.parametrize("color", [c for c in ChatColor if c.code.json])
def test_json_round_trip(color):
    assert color_from_json(color.code.json) is color
    assert color_from_json(f'"{color.code.json}"') is color


def test_json_light_purple_is_purple():
    assert color_from_json("light_purple") is ChatColor.PURPLE


def test_on_wraps_text():
    assert ChatColor.BLUE.on("") == ""
    assert ChatColor.BLUE.on("x") == str(ChatColor.BLUE) + "x" + str(ChatColor.RESET)


def test_console_plain_text():
    assert translate_console("plain") == "\x1b[mplain\x1b[0m"


def test_console_single_color():
    assert translate_console("&chi") == "\x1b[31mhi\x1b[0m"


def test_console_formats_accumulate():
    assert translate_console("&c&lhi") == "\x1b[31;1mhi\x1b[0m"


def test_console_color_replaces_previous_forms():
    assert translate_console("&ca&9b") == translate_console("&ca") + translate_console("&9b")


def test_console_removes_known_codes():
    rendered = translate_console("§aone &btwo")
    assert "§" not in rendered
    assert "&" not in rendered
    assert "one " in rendered and "two" in rendered


def test_console_empty():
    assert translate_console("") == ""