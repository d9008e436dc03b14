import pytest

from cascarishell.lexer import ShellSyntaxError, check_syntax, split_input, tokenize
from cascarishell.tokens import Element, TokenType


def _data(elements):
    return [e.data for e in elements]


def _types(elements):
    return [e.type for e in elements]


def test_split_input_on_spaces():
    elements = split_input("echo hello   world")
    assert _data(elements) == ["echo", "hello", "world"]
    assert all(t == TokenType.VOID for t in _types(elements))


def test_split_input_keeps_quoted_spaces():
    elements = split_input('echo "a b"')
    assert _data(elements) == ["echo", '"a b"']
    assert _types(elements) == [TokenType.VOID, TokenType.DOUBLE_QUOTED]


def test_split_input_unclosed_quote():
    with pytest.raises(ShellSyntaxError) as info:
        split_input("echo 'x")
    assert info.value.exit_code == 1


def test_split_input_empty():
    assert split_input("   ") == []


def test_tokenize_pipe_without_spaces():
    elements = tokenize("ls|wc")
    assert _data(elements) == ["ls", "|", "wc"]
    assert _types(elements) == [TokenType.VOID, TokenType.PIPE, TokenType.VOID]


def test_tokenize_heredoc_expanding_delimiter():
    elements = tokenize("cat<<EOF")
    assert _data(elements) == ["cat", "<<", "EOF"]
    assert _types(elements) == [
        TokenType.VOID,
        TokenType.HEREDOC,
        TokenType.EOF_EXPAND,
    ]


def test_tokenize_heredoc_literal_delimiter():
    elements = tokenize("cat << 'EOF'")
    assert _types(elements)[-1] == TokenType.EOF_LITERAL


@pytest.mark.parametrize(
    "line, operator, file_type",
    [
        ("echo hi > out", TokenType.REDIR_OUT, TokenType.OUTFILE),
        ("echo hi >> out", TokenType.REDIR_APPEND, TokenType.APPEND_FILE),
        ("echo hi < out", TokenType.REDIR_IN, TokenType.INFILE),
    ],
)
def test_tokenize_redirections(line, operator, file_type):
    elements = tokenize(line)
    assert _types(elements) == [TokenType.VOID, TokenType.VOID, operator, file_type]
    assert elements[-1].data == "out"


def test_tokenize_attached_append():
    elements = tokenize("echo a>>b")
    assert _data(elements) == ["echo", "a", ">>", "b"]
    assert _types(elements)[2:] == [TokenType.REDIR_APPEND, TokenType.APPEND_FILE]


def test_tokenize_quoted_pipe_is_not_split():
    elements = tokenize('echo "a|b"')
    assert _data(elements) == ["echo", '"a|b"']
    assert _types(elements)[1] == TokenType.DOUBLE_QUOTED


def test_tokenize_empty_line():
    assert tokenize("") == []


def test_trailing_pipe_is_error():
    with pytest.raises(ShellSyntaxError) as info:
        tokenize("ls |")
    assert info.value.exit_code == 258
    assert "`newline'" in str(info.value)


def test_double_pipe_is_error():
    with pytest.raises(ShellSyntaxError) as info:
        tokenize("ls | | wc")
    assert "`|'" in str(info.value)


def test_redirection_followed_by_pipe_is_error():
    with pytest.raises(ShellSyntaxError) as info:
        tokenize("echo > | wc")
    assert "`|'" in str(info.value)


def test_triple_less_is_error():
    with pytest.raises(ShellSyntaxError):
        tokenize("cat <<< x")


@pytest.mark.parametrize("line, char", [("ls ; ls", ";"), ("a && b", "&")])
def test_unsupported_tokens(line, char):
    with pytest.raises(ShellSyntaxError) as info:
        tokenize(line)
    assert info.value.exit_code == 258
    assert f"`{char}'" in str(info.value)


def test_check_syntax_missing_delimiter():
    elements = [Element("<<", TokenType.HEREDOC), Element("x", TokenType.VOID)]
    with pytest.raises(ShellSyntaxError) as info:
        check_syntax(elements)
    assert "`newline'" in str(info.value)


def test_check_syntax_accepts_valid_line():
    elements = tokenize("cat < in | grep x > out")
    check_syntax(elements)
    assert _data(elements) == ["cat", "<", "in", "|", "grep", "x", ">", "out"]