import pytest

from mimishell.env import Environment
from mimishell.errors import ShellError, ShellSyntaxError
from mimishell.expand import LineCursor


@pytest.fixture
def env():
    return Environment(["USER=alice", "PAD=  a  ", "X=a b"])


def test_unquoted_variable_is_rescanned(env):
    cursor = LineCursor("$USER rest", env)
    cursor.expand_dollar()
    assert cursor.text == env.lookup("USER") + " rest"
    assert cursor.pos == 0


def test_quoted_variable_moves_cursor_past_value(env):
    cursor = LineCursor("$USER rest", env)
    cursor.expand_dollar(True)
    assert cursor.pos == len(env.lookup("USER"))
    assert cursor.text[cursor.pos:] == " rest"


def test_unset_variable_is_removed(env):
    cursor = LineCursor("$NOPE x", env)
    cursor.expand_dollar()
    assert cursor.text == " x"


def test_positional_digit_takes_one_character(env):
    cursor = LineCursor("$1abc", env)
    cursor.expand_dollar()
    assert cursor.text == "abc"


def test_last_status_is_inserted(env):
    cursor = LineCursor("$? x", env, 42)
    cursor.expand_dollar()
    assert cursor.text == "42 x"
    assert cursor.pos == len("42")


def test_lone_dollar_is_kept(env):
    cursor = LineCursor("$ x", env)
    cursor.expand_dollar()
    assert cursor.text == "$ x"
    assert cursor.current() == " "


def test_unquoted_value_is_trimmed(env):
    cursor = LineCursor("$PAD", env)
    cursor.expand_dollar()
    assert cursor.text == env.lookup("PAD").strip(" ")


def test_double_quotes_keep_value_untrimmed(env):
    cursor = LineCursor('"$PAD"', env)
    cursor.skip_double_quote()
    assert cursor.text == env.lookup("PAD")
    assert cursor.pos == len(cursor.text)


def test_double_quote_expands_and_strips_quotes(env):
    cursor = LineCursor('"$USER b"', env)
    cursor.skip_double_quote()
    assert cursor.text == env.lookup("USER") + " b"
    assert cursor.current() == ""


def test_redirect_with_spaces_is_ambiguous(env):
    cursor = LineCursor("$X", env)
    cursor.expand_dollar(False, True)
    assert cursor.ambiguous_redirect is True
    assert cursor.text == "$X"
    assert cursor.pos == len(cursor.text)


def test_unclosed_double_quote_is_syntax_error(env):
    cursor = LineCursor('"abc', env)
    with pytest.raises(ShellSyntaxError) as info:
        cursor.skip_double_quote()
    assert info.value.token == "newline"


def test_single_quote_removed_verbatim(env):
    cursor = LineCursor("'a $USER'c", env)
    cursor.skip_single_quote()
    assert cursor.text == "a $USERc"
    assert cursor.text[:cursor.pos] == "a $USER"


def test_unclosed_single_quote(env):
    cursor = LineCursor("'abc", env)
    with pytest.raises(ShellError) as info:
        cursor.skip_single_quote()
    assert info.value.message == "unclosed single quote"
    assert info.value.status == 1


def test_odd_backslashes_escape_next_character(env):
    cursor = LineCursor("\\\\\\$x", env)
    cursor.skip_backslashes()
    assert cursor.text == "\\$x"
    assert cursor.text[cursor.pos:] == "x"


def test_even_backslashes_collapse(env):
    cursor = LineCursor("\\\\\\\\y", env)
    cursor.skip_backslashes()
    assert cursor.text == "\\\\y"
    assert cursor.current() == "y"


def test_trailing_backslash_is_error(env):
    cursor = LineCursor("\\", env)
    with pytest.raises(ShellError) as info:
        cursor.skip_backslashes()
    assert info.value.message == "missing escape sequence character"


def test_skip_spaces_counts(env):
    cursor = LineCursor("   a", env)
    assert cursor.skip_spaces() == len("   ")
    assert cursor.current() == "a"