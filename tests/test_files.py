import pathlib

from quern.commontypes import CommandStatus, Position
from quern.editor.state import EditorState


def test_find_file_and_save(driver, tmp_path: pathlib.Path):
    path = tmp_path / "notes.txt"
    path.write_text("first\nsecond\n")
    driver.keys("C-x C-f")
    driver.type(str(path))
    driver.keys("C-m")
    assert driver.message == f"Opened {path}"
    assert driver.editor.current_buffer.name == "notes.txt"
    assert driver.editor.current_buffer.lines == ["first", "second"]

    driver.type("new ")
    driver.keys("C-x C-s")
    assert driver.message == f"Wrote 2 lines to {path}"
    assert path.read_text() == "new first\nsecond\n"
    assert not driver.editor.current_buffer.modified

    driver.keys("C-x C-s")
    assert driver.message == "(No changes need to be saved)"


def test_find_new_file(driver, tmp_path: pathlib.Path):
    path = tmp_path / "fresh.txt"
    driver.keys("C-x C-f")
    driver.type(str(path))
    driver.keys("C-m")
    assert driver.message == f"(New file) {path}"
    driver.type("hello")
    driver.keys("C-x C-s")
    assert path.read_text() == "hello\n"


def test_save_without_file_name(driver):
    assert driver.keys("C-x C-s") is CommandStatus.FAILURE
    assert driver.message == "No file name"


def test_write_file(driver, tmp_path: pathlib.Path):
    path = tmp_path / "out.txt"
    driver.type("abc")
    driver.keys("C-x C-w")
    driver.type(str(path))
    driver.keys("C-m")
    assert path.read_text() == "abc\n"
    assert driver.editor.current_buffer.name == "out.txt"
    assert driver.editor.current_buffer.path == path


def test_insert_file(driver, tmp_path: pathlib.Path):
    path = tmp_path / "insert.txt"
    path.write_text("XY")
    driver.load("ab", col=1)
    driver.keys("C-x i")
    driver.type(str(path))
    driver.keys("C-m")
    assert driver.text == "aXYb"


def test_switch_and_cycle_buffers(driver, tmp_path: pathlib.Path):
    path = tmp_path / "other.txt"
    path.write_text("other")
    driver.editor.open_file(path)
    assert driver.editor.buffer_names() == ["*scratch*", "other.txt"]

    driver.keys("C-x b")
    assert driver.message == "Switch to buffer (default *scratch*): "
    driver.keys("C-m")
    assert driver.editor.current_buffer.name == "*scratch*"

    driver.keys("C-x n")
    assert driver.message == "Buffer: other.txt"
    driver.keys("C-x p")
    assert driver.editor.current_buffer.name == "*scratch*"


def test_switch_buffer_completion(driver):
    driver.editor.show_output("*Shell Command Output*", "out")
    driver.keys("C-x b")
    driver.type("*Sh")
    driver.keys("C-i")
    assert driver.editor.prompt.input == "*Shell Command Output*"


def test_only_one_buffer(driver):
    driver.keys("C-x n")
    assert driver.message == "Only one buffer"


def test_kill_buffer(driver, tmp_path: pathlib.Path):
    path = tmp_path / "doomed.txt"
    path.write_text("bye")
    driver.editor.open_file(path)
    driver.keys("C-x k C-m")
    assert driver.message == "Killed buffer doomed.txt"
    assert driver.editor.buffer_names() == ["*scratch*"]


def test_kill_only_buffer(driver):
    assert driver.keys("C-x k C-m") is CommandStatus.FAILURE
    assert driver.message == "Can't kill the only buffer"


def test_kill_modified_buffer_asks(driver, tmp_path: pathlib.Path):
    path = tmp_path / "dirty.txt"
    path.write_text("x")
    driver.editor.open_file(path)
    driver.type("y")
    driver.keys("C-x k C-m")
    assert driver.message == "Buffer dirty.txt modified; kill anyway? (yes or no): "
    driver.type("no")
    driver.keys("C-m")
    assert driver.message == "Buffer not killed"
    assert "dirty.txt" in driver.editor.buffer_names()

    driver.keys("C-x k C-m")
    driver.type("yes")
    driver.keys("C-m")
    assert driver.editor.buffer_names() == ["*scratch*"]


def test_quit_with_modified_buffer(driver, tmp_path: pathlib.Path):
    path = tmp_path / "dirty.txt"
    path.write_text("x")
    driver.editor.open_file(path)
    driver.type("y")
    driver.keys("C-x C-c")
    assert driver.editor.running
    assert driver.message == "Buffer dirty.txt modified; really quit? (y/n): "
    driver.type("n")
    driver.keys("C-m")
    assert driver.editor.running
    driver.keys("C-x C-c y C-m")
    assert not driver.editor.running


def test_forced_quit(driver, tmp_path: pathlib.Path):
    path = tmp_path / "dirty.txt"
    path.write_text("x")
    driver.editor.open_file(path)
    driver.type("y")
    driver.keys("C-u C-x C-c")
    assert not driver.editor.running


def test_not_modified(driver):
    driver.type("x")
    driver.keys("M-~")
    assert not driver.editor.current_buffer.modified


def test_auto_save(settings, tmp_path: pathlib.Path):
    now = [0.0]
    editor = EditorState(settings, clock=lambda: now[0])
    path = tmp_path / "draft.txt"
    path.write_text("draft")
    editor.open_file(path)
    editor.auto_save_enabled = True

    editor.insert_char("!")
    editor.check_auto_save()
    auto_save_path = tmp_path / "#draft.txt#"
    assert not auto_save_path.exists()

    now[0] = 31.0
    editor.check_auto_save()
    assert auto_save_path.read_text() == "!draft\n"

    editor.current_buffer.save()
    assert not auto_save_path.exists()


def test_auto_save_mode_toggle(driver):
    assert not driver.editor.auto_save_enabled
    driver.keys("C-x a")
    assert driver.editor.auto_save_enabled
    assert driver.message == "Auto-save enabled"
    driver.keys("M-0 C-x a")
    assert not driver.editor.auto_save_enabled


def test_shell_command(driver):
    driver.keys("M-!")
    driver.type("echo hello")
    driver.keys("C-m")
    assert driver.editor.current_buffer.name == "*Shell Command Output*"
    assert driver.text == "hello"
    assert driver.message == "Shell command: echo hello"
    assert driver.cursor == Position(line=0, col=0)


def test_list_buffers(driver, tmp_path: pathlib.Path):
    path = tmp_path / "a.txt"
    path.write_text("x\ny\n")
    driver.editor.open_file(path)
    driver.type("z")
    driver.editor.buffers[0].read_only = True
    driver.keys("C-x C-b")
    assert driver.editor.current_buffer.name == "*Buffer List*"
    lines = driver.editor.current_buffer.lines
    assert lines[0] == " CRM Buffer           Size  File"
    assert lines[2].split() == ["%", "*scratch*", "1"]
    assert lines[3].split() == [".", "*", "a.txt", "2", str(path)]
    assert len(lines) == 4


def test_revert_buffer(driver, tmp_path: pathlib.Path):
    path = tmp_path / "r.txt"
    path.write_text("one\ntwo\n")
    driver.editor.open_file(path)
    driver.keys("C-e")
    driver.type("xx")
    assert driver.editor.current_buffer.modified
    driver.keys("C-x C-r")
    assert driver.text == "one\ntwo"
    assert not driver.editor.current_buffer.modified
    assert driver.cursor == Position(line=0, col=0)
    assert driver.message == f"Reverted {path}"


def test_revert_buffer_without_file(driver):
    assert driver.keys("C-x C-r") is CommandStatus.FAILURE
    assert driver.message == "Buffer has no file"


def test_read_only_file_buffer(driver, tmp_path: pathlib.Path):
    path = tmp_path / "locked.txt"
    path.write_text("keep\n")
    driver.editor.open_file(path)
    driver.keys("C-x C-q")
    assert driver.editor.current_buffer.read_only
    assert driver.keys("C-d") is CommandStatus.FAILURE
    assert driver.message == f"Buffer is read-only: {path.name}"
    assert path.read_text() == "keep\n"
