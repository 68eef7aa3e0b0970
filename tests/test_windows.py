from quern.commontypes import CommandStatus, Position


def heights(editor):
    return [w.height for w in editor.windows]


def test_split_and_delete_window(driver):
    editor = driver.editor
    driver.keys("C-x 2")
    assert heights(editor) == [12, 11]
    assert editor.current_window == 0
    assert editor.windows[1].buffer_index == editor.windows[0].buffer_index

    driver.keys("C-x o")
    assert editor.current_window == 1
    driver.keys("C-x 0")
    assert heights(editor) == [24]
    assert editor.current_window == 0


def test_delete_other_windows(driver):
    editor = driver.editor
    driver.keys("C-x 2 C-x 2")
    assert heights(editor) == [6, 5, 11]
    driver.keys("M-2 C-x o")
    assert editor.current_window == 2
    driver.keys("C-x 1")
    assert heights(editor) == [24]
    assert editor.current_window == 0


def test_window_too_small_to_split(driver):
    driver.editor.window.height = 3
    assert driver.keys("C-x 2") is CommandStatus.FAILURE
    assert driver.message == "Window too small to split"
    assert len(driver.editor.windows) == 1


def test_cannot_delete_only_window(driver):
    assert driver.keys("C-x 0") is CommandStatus.FAILURE
    assert driver.message == "Can't delete the only window"


def test_windows_share_the_buffer(driver):
    driver.load("one\ntwo\nthree", line=2, col=3)
    driver.keys("C-x 2")
    assert driver.editor.windows[1].cursor == Position(line=2, col=3)
    driver.keys("C-x h C-w")
    assert driver.text == ""
    driver.keys("C-x o")
    assert driver.cursor == Position(line=0, col=0)
    driver.keys("C-y")
    assert driver.text == "one\ntwo\nthree"


def test_layout_windows(editor):
    editor.split_window()
    editor.layout_windows(25)
    assert heights(editor) == [12, 11]
    editor.layout_windows(30)
    assert heights(editor) == [14, 14]
    editor.layout_windows(9)
    assert heights(editor) == [4, 3]
