from quern.commontypes import CommandStatus, Position
from quern.editor.keys import Key


def test_record_and_replay(driver):
    driver.keys("C-x (")
    assert driver.editor.macros.recording
    driver.type("ab")
    driver.keys("C-x )")
    assert driver.message == "Keyboard macro defined (2 keys)"
    assert driver.editor.macros.keys == [Key.char("a"), Key.char("b")]
    driver.keys("M-2 C-x e")
    assert driver.text == "ababab"


def test_prefix_keys_are_recorded(driver):
    driver.keys("C-x ( C-u x C-x )")
    assert driver.editor.macros.keys == [Key.ctrl("u"), Key.char("x")]
    driver.keys("C-x e")
    assert driver.text == "x" * 8


def test_failed_commands_are_not_recorded(driver):
    driver.keys("C-x ( C-b a C-x )")
    assert driver.editor.macros.keys == [Key.char("a")]


def test_macro_replays_into_prompts(driver):
    driver.load("abcdef")
    driver.keys("C-x ( M-x")
    driver.type("forward-char")
    driver.keys("C-m C-x )")
    assert driver.cursor == Position(line=0, col=1)
    driver.keys("C-x e")
    assert driver.cursor == Position(line=0, col=2)


def test_no_macro_defined(driver):
    assert driver.keys("C-x e") is CommandStatus.FAILURE
    assert driver.message == "No keyboard macro defined"


def test_cannot_call_while_defining(driver):
    driver.keys("C-x (")
    assert driver.keys("C-x e") is CommandStatus.FAILURE
    assert driver.message == "Can't execute macro while defining it"
    assert driver.editor.macros.recording


def test_end_without_start(driver):
    assert driver.keys("C-x )") is CommandStatus.FAILURE
    assert driver.message == "Not defining keyboard macro"


def test_macro_cannot_start_recording_during_playback(driver):
    driver.editor.macros.keys = [Key.ctlx("("), Key.char("z")]
    driver.keys("C-x e")
    assert driver.text == "z"
    assert not driver.editor.macros.recording
    assert not driver.editor.macros.playing


def test_slots(driver):
    driver.keys("C-x ( q C-x )")
    driver.keys("C-x M-s 4")
    assert driver.message == "Macro saved to slot 4"
    driver.keys("C-x ( w C-x )")
    driver.keys("C-x M-e 4")
    assert driver.text == "qwq"
    driver.keys("C-x M-l 4")
    assert driver.message == "Macro loaded from slot 4 (1 keys)"
    driver.keys("C-x e")
    assert driver.text == "qwqq"


def test_slot_from_argument(driver):
    driver.keys("C-x ( q C-x )")
    driver.keys("M-7 C-x M-s")
    assert driver.editor.macros.slots[7] == [Key.char("q")]


def test_slot_capture_rejects_non_digit(driver):
    driver.keys("C-x ( q C-x )")
    assert driver.keys("C-x M-s x") is CommandStatus.ABORT
    assert driver.editor.macros.stored_count() == 0


def test_empty_slot(driver):
    assert driver.keys("C-x M-l 2") is CommandStatus.FAILURE
    assert driver.message == "Macro slot 2 is empty"


def test_save_and_load_macro_file(driver, settings):
    driver.keys("C-x ( h i C-x )")
    driver.keys("C-x M-s 1")
    driver.keys("C-x M-S")
    assert settings.macros_path.exists()
    assert driver.message == f"Saved 1 macro(s) to {settings.macros_path}"

    driver.editor.macros.slots[1] = []
    driver.keys("C-x M-L")
    assert driver.message == f"Loaded 1 macro(s) from {settings.macros_path}"
    assert driver.editor.macros.slots[1] == [Key.char("h"), Key.char("i")]


def test_load_macro_file_missing(driver, settings):
    driver.keys("C-x M-L")
    assert driver.message == f"No macros found in {settings.macros_path}"


def test_load_macro_file_corrupt(driver, settings):
    settings.macros_path.write_text("{not json")
    assert driver.keys("C-x M-L") is CommandStatus.FAILURE
    assert driver.message.startswith("Error loading macros:")


def test_call_empty_slot(driver):
    assert driver.keys("M-3 C-x M-e") is CommandStatus.FAILURE
    assert driver.message == "Macro slot 3 is empty"
