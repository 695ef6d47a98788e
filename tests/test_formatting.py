from chat_client.chat.formatting import escape_html, render


def test_escape_html_order():
    assert escape_html("<a>&\"'") == "&lt;a&gt;&amp;&quot;&#039;"
    # Already-escaped input is escaped again exactly once, not twice
    assert escape_html("&lt;") == "&amp;lt;"


def test_inline_markup_on_one_line():
    out = render("**a** *b* `c`")
    assert out == "<strong>a</strong> <em>b</em> <code>c</code>"
    assert "*" not in out
    assert "`" not in out
    assert "<br>" not in out


def test_fenced_block_is_escaped_and_trimmed():
    assert render("```\nhello <b>\n```") == "<pre><code>hello &lt;b&gt;</code></pre>"


def test_fenced_block_contents_are_not_formatted():
    out = render("```\n**not bold** *x* `y`\n```")
    assert out == "<pre><code>**not bold** *x* `y`</code></pre>"


def test_fenced_block_keeps_inner_newlines():
    out = render("before\n```\na\nb\n```\nafter")
    assert out == "before<br><pre><code>a\nb</code></pre><br>after"


def test_inline_markup_is_not_escaped():
    assert render("**<i>x</i>**") == "<strong><i>x</i></strong>"


def test_newlines_become_breaks():
    assert render("one\ntwo\n") == "one<br>two<br>"


def test_plain_text_passes_through():
    assert render("just words") == "just words"
    assert render("") == ""


def test_control_characters_are_preserved():
    assert render("a\x00b") == "a\x00b"
    assert render("\x000\x00 and ```\nx\n```") == "\x000\x00 and <pre><code>x</code></pre>"


def test_multiple_fenced_blocks():
    out = render("```\n<a>\n``` mid *x* ```\n<b>\n```")
    assert out == "<pre><code>&lt;a&gt;</code></pre> mid <em>x</em> <pre><code>&lt;b&gt;</code></pre>"
