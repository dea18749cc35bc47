"""Tests for the pattern parser."""

from __future__ import annotations

import pytest

from patternlog.foundation.errors import ErrorCode, PatternError
from patternlog.pattern import (
    DEFAULT_DATETIME_FORMAT,
    LevelOptions,
    LiteralSegment,
    NoOptions,
    Pattern,
    SpanOptions,
    TokenKind,
    TokenSegment,
    compile_pattern,
    parse,
)

FULL = (
    "$level(width = 5, alignment = '>') $datetime $target$fields(prefix = '{', suffix = '}')"
    "$span(prefix = '::', args, args_prefix ='{', args_suffix = '}'): $message"
)


def error_of(text: str, **kw: str):  # noqa: ANN201
    result = parse(text, **kw)
    assert result.is_err(), f"expected {text!r} to fail"
    return result.unwrap_err()


# ═════════════════════════════════════════════════════════════════════════════
# Successful parses
# ═════════════════════════════════════════════════════════════════════════════


class TestSegments:
    def test_literal_only(self) -> None:
        pattern = compile_pattern("plain text, no tokens")
        assert pattern.segments == (LiteralSegment("plain text, no tokens"),)
        assert pattern.is_literal

    def test_empty_pattern(self) -> None:
        assert compile_pattern("").segments == ()

    def test_tokens_and_literals_in_order(self) -> None:
        pattern = compile_pattern("$level $target: $message")
        assert pattern.segments == (
            TokenSegment(TokenKind.LEVEL, LevelOptions()),
            LiteralSegment(" "),
            TokenSegment(TokenKind.TARGET, NoOptions()),
            LiteralSegment(": "),
            TokenSegment(TokenKind.MESSAGE, NoOptions()),
        )

    def test_doubled_sigil_is_literal_and_merges(self) -> None:
        pattern = compile_pattern("cost: $$5 $$$message")
        assert pattern.segments == (
            LiteralSegment("cost: $5 $"),
            TokenSegment(TokenKind.MESSAGE, NoOptions()),
        )

    def test_token_names_are_case_insensitive(self) -> None:
        assert compile_pattern("$LEVEL").segments == compile_pattern("$level").segments

    def test_identifier_ends_at_non_word_character(self) -> None:
        pattern = compile_pattern("$target::x")
        assert pattern.segments[1] == LiteralSegment("::x")

    def test_full_option_set(self) -> None:
        pattern = compile_pattern(FULL)
        level, span = pattern.tokens[0], pattern.tokens[4]
        assert level.options == LevelOptions(width=5, alignment=">")
        assert span.options == SpanOptions(prefix="::", args=True, args_prefix="{", args_suffix="}")

    def test_defaults_when_options_absent(self) -> None:
        datetime_token = compile_pattern("$datetime").tokens[0]
        assert datetime_token.options.fmt == DEFAULT_DATETIME_FORMAT
        fields_token = compile_pattern("$fields").tokens[0]
        assert (fields_token.options.prefix, fields_token.options.suffix, fields_token.options.quote) == ("", "", "`")

    def test_quoted_values_may_contain_parens_and_commas(self) -> None:
        token = compile_pattern("$fields(prefix = '(', suffix = \"), \")").tokens[0]
        assert token.options.prefix == "("
        assert token.options.suffix == "), "

    def test_explicit_flag_values(self) -> None:
        assert compile_pattern("$span(args = true)").tokens[0].options.args is True
        assert compile_pattern("$span(args = false)").tokens[0].options.args is False

    def test_empty_option_list(self) -> None:
        assert compile_pattern("$level()").tokens[0].options == LevelOptions()

    def test_whitespace_inside_option_list(self) -> None:
        token = compile_pattern("$level(  width=7 ,alignment   =  '<'  )").tokens[0]
        assert token.options == LevelOptions(width=7, alignment="<")

    def test_text_token(self) -> None:
        assert compile_pattern("$text(value = 'hi')").tokens[0].options.value == "hi"

    def test_custom_sigil(self) -> None:
        pattern = compile_pattern("%level %% $target", sigil="%")
        assert pattern.segments[1] == LiteralSegment(" % $target")

    def test_bad_sigil_rejected(self) -> None:
        with pytest.raises(ValueError, match="sigil"):
            parse("x", sigil="ab")
        with pytest.raises(ValueError, match="sigil"):
            parse("x", sigil="a")

    def test_parse_is_deterministic(self) -> None:
        assert compile_pattern(FULL) == compile_pattern(FULL)
        assert Pattern.parse(FULL) == compile_pattern(FULL)

    def test_structural_equality_ignores_source(self) -> None:
        assert compile_pattern("$level()") == compile_pattern("$level")
        assert str(compile_pattern("$level()")) == "$level()"

    def test_token_of_builds_validated_token(self) -> None:
        assert TokenSegment.of("level", width=5, alignment=">") == compile_pattern(
            "$level(width = 5, alignment = '>')").tokens[0]


# ═════════════════════════════════════════════════════════════════════════════
# Errors
# ═════════════════════════════════════════════════════════════════════════════


class TestErrors:
    def test_unknown_token(self) -> None:
        error = error_of("$unknown")
        assert error.code is ErrorCode.UNKNOWN_TOKEN
        assert error.position == 0
        assert "unknown" in error.message

    def test_unknown_token_position_mid_pattern(self) -> None:
        assert error_of("abc $level $bogus").position == 11

    def test_compile_raises_with_error_attached(self) -> None:
        with pytest.raises(PatternError) as info:
            compile_pattern("$unknown")
        assert info.value.code is ErrorCode.UNKNOWN_TOKEN
        assert info.value.position == 0
        assert isinstance(info.value, ValueError)

    def test_unknown_option(self) -> None:
        error = error_of("$level(colour = 'red')")
        assert error.code is ErrorCode.UNKNOWN_OPTION
        assert error.position == 7

    def test_option_not_allowed_on_kind(self) -> None:
        assert error_of("$target(width = 5)").code is ErrorCode.UNKNOWN_OPTION
        assert error_of("$message(prefix = 'x')").code is ErrorCode.UNKNOWN_OPTION

    @pytest.mark.parametrize("text", [
        "$level(width = 'wide')",
        "$level(width)",
        "$level(width = true)",
        "$level(alignment = 5)",
        "$level(alignment = '^')",
        "$level(width = -1)",
        "$level(width = 1025)",
        "$level(width = 99999999999999999999)",
        "$fields(prefix = 3)",
        "$fields(quote = 'ab')",
        "$span(args = 1)",
        "$span(args = 'yes')",
    ])
    def test_wrong_literal_type(self, text: str) -> None:
        error = error_of(text)
        assert error.code is ErrorCode.INVALID_OPTION
        assert error.position == text.index("(") + 1

    def test_missing_required_option(self) -> None:
        error = error_of("x $text")
        assert error.code is ErrorCode.MISSING_OPTION
        assert error.position == 2

    def test_duplicate_option(self) -> None:
        error = error_of("$span(args, args)")
        assert error.code is ErrorCode.DUPLICATE_OPTION
        assert error.position == 12

    def test_unterminated_token(self) -> None:
        error = error_of("ab $level(width = 5")
        assert error.code is ErrorCode.UNTERMINATED_TOKEN
        assert error.position == 3

    def test_unterminated_quote(self) -> None:
        error = error_of("$fields(prefix = '{)")
        assert error.code is ErrorCode.UNTERMINATED_QUOTE
        assert error.position == 17

    def test_paren_inside_unterminated_quote_is_not_a_close(self) -> None:
        assert error_of("$fields(prefix = \")\"").code is ErrorCode.UNTERMINATED_TOKEN

    @pytest.mark.parametrize(("text", "position"), [
        ("trailing $", 9),
        ("$ level", 0),
        ("$1level", 0),
        ("$level(width = 5 alignment = '>')", 17),
        ("$level(width = 5,)", 17),
        ("$level(width = 5px)", 15),
        ("$span(prefix = colon)", 15),
        ("$span(= 'x')", 6),
    ])
    def test_syntax_errors(self, text: str, position: int) -> None:
        error = error_of(text)
        assert error.code is ErrorCode.INVALID_SYNTAX
        assert error.position == position

    def test_error_is_all_or_nothing(self) -> None:
        result = parse("$level $target $nope $message")
        assert result.is_err()
        assert result.ok() is None

    def test_error_format_points_at_position(self) -> None:
        error = error_of("$level $nope")
        assert error.format() == "unknown token kind 'nope' at position 7\n  $level $nope\n         ^"
        assert error.column == 8
