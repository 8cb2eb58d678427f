"""
Tests for delimiter inference and token splitting.
"""

from opkit.tokenizer import Delimiter, infer_delimiter, iter_tokens, opposite, tokenize


class TestInferDelimiter:

    def test_comma_separated(self):
        assert infer_delimiter("1,2,3") is Delimiter.COMMA

    def test_newline_separated(self):
        assert infer_delimiter("1\n2\n3") is Delimiter.NEWLINE

    def test_tie_resolves_to_comma(self):
        assert infer_delimiter("1,2\n3") is Delimiter.COMMA
        assert infer_delimiter("") is Delimiter.COMMA
        assert infer_delimiter("single") is Delimiter.COMMA

    def test_newline_must_strictly_dominate(self):
        assert infer_delimiter("1,2\n3\n4") is Delimiter.NEWLINE

    def test_opposite(self):
        assert opposite(Delimiter.COMMA) is Delimiter.NEWLINE
        assert opposite(Delimiter.NEWLINE) is Delimiter.COMMA


class TestTokenize:

    def test_trims_tokens(self):
        tokens, delimiter = tokenize(" a , b ,c ")
        assert tokens == ["a", "b", "c"]
        assert delimiter is Delimiter.COMMA

    def test_runs_of_separators_collapse(self):
        tokens, _ = tokenize("a,,\n\nb,\n,c")
        assert tokens == ["a", "b", "c"]

    def test_whitespace_only_fields_dropped(self):
        tokens, _ = tokenize("a, ,b\n   \nc")
        assert tokens == ["a", "b", "c"]

    def test_leading_and_trailing_separators(self):
        tokens, delimiter = tokenize("\n1\n2\n")
        assert tokens == ["1", "2"]
        assert delimiter is Delimiter.NEWLINE

    def test_crlf_input(self):
        tokens, _ = tokenize("1\r\n2\r\n3")
        assert tokens == ["1", "2", "3"]

    def test_empty_text(self):
        assert tokenize("") == ([], Delimiter.COMMA)

    def test_fullwidth_comma_is_not_a_separator(self):
        tokens, _ = tokenize("1，2")
        assert tokens == ["1，2"]

    def test_iter_tokens_is_lazy(self):
        tokens = iter_tokens("a,b")
        assert next(tokens) == "a"
        assert list(tokens) == ["b"]
