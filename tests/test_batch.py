"""
Tests for chunked batch application and format flipping.
"""

import pytest

from opkit.batch import BatchStats, apply_batch, apply_per_char, flip_format, identity
from opkit.errors import ConfigError
from opkit.processors import NumericCodec, PROFILES, add_quotes, normalize_comma, strip_quotes
from opkit.tokenizer import Delimiter


@pytest.fixture
def codec():
    return NumericCodec(PROFILES['general'])


class TestApplyBatch:

    def test_identity_preserves_comma_delimiter(self):
        assert apply_batch("1,2,3", identity) == "1,2,3"

    def test_identity_preserves_newline_delimiter(self):
        assert apply_batch("1\n2\n3", identity) == "1\n2\n3"

    def test_output_is_normalized(self):
        assert apply_batch(" 1 ,, 2 ,\n3,", identity) == "1,2,3"

    def test_empty_input(self):
        assert apply_batch("", add_quotes) == ""
        assert apply_batch(" ,\n, ", add_quotes) == ""

    def test_single_token_has_no_delimiter(self):
        assert apply_batch("42", add_quotes) == "'42'"

    def test_explicit_delimiter(self):
        assert apply_batch("1,2", identity, delimiter=Delimiter.NEWLINE) == "1\n2"

    def test_encrypt_then_decrypt(self, codec):
        encrypted = apply_batch("100,200,300", codec.encode)
        assert encrypted.count(",") == 2
        assert "100" not in encrypted.split(",")
        assert apply_batch(encrypted, codec.decode) == "100,200,300"

    def test_strip_quotes_scenario(self):
        assert apply_batch("'a', b , 'c'", strip_quotes) == "a,b,c"

    def test_mixed_tokens_pass_through(self, codec):
        encrypted = apply_batch("7\nabc\n8", codec.encode)
        parts = encrypted.split("\n")
        assert parts[1] == "abc"
        assert apply_batch(encrypted, codec.decode) == "7\nabc\n8"

    @pytest.mark.parametrize("batch_size", [1, 2, 3, 7, 999, 1000, 10000])
    def test_chunk_size_invariance(self, codec, batch_size):
        text = "\n".join(str(n) for n in range(2500)) + "\nx\n'q'"
        baseline = apply_batch(text, codec.encode, batch_size=1000)
        assert apply_batch(text, codec.encode, batch_size=batch_size) == baseline

    def test_stats(self, codec):
        stats = BatchStats()
        apply_batch("1,2,abc,3,4", codec.encode, batch_size=2, stats=stats)
        assert stats.tokens == 5
        assert stats.changed == 4
        assert stats.chunks == 3

    def test_invalid_batch_size(self):
        with pytest.raises(ConfigError):
            apply_batch("1,2", identity, batch_size=0)


class TestFlipFormat:

    def test_comma_to_newline(self):
        assert flip_format("1,2,3") == "1\n2\n3"

    def test_newline_to_comma(self):
        assert flip_format("1\n2\n3") == "1,2,3"

    def test_flip_twice_restores_normalized_text(self):
        assert flip_format(flip_format("a, b, c")) == "a,b,c"

    def test_tie_flips_to_newline(self):
        assert flip_format("a,b\nc") == "a\nb\nc"

    def test_empty(self):
        assert flip_format("") == ""

    @pytest.mark.parametrize("batch_size", [1, 4, 1000])
    def test_chunk_size_invariance(self, batch_size):
        text = ",".join(str(n) for n in range(50))
        assert flip_format(text, batch_size=batch_size) == text.replace(",", "\n")


class TestApplyPerChar:

    def test_normalizes_commas(self):
        assert apply_per_char("1，2，3", normalize_comma) == "1,2,3"

    def test_leaves_everything_else(self):
        text = " a，\n b ，c "
        assert apply_per_char(text, normalize_comma) == " a,\n b ,c "

    @pytest.mark.parametrize("batch_size", [1, 2, 5, 1000])
    def test_chunk_size_invariance(self, batch_size):
        text = "，".join(str(n) for n in range(100))
        assert apply_per_char(text, normalize_comma, batch_size) == text.replace("，", ",")

    def test_stats_count_characters(self):
        stats = BatchStats()
        apply_per_char("a，b，c", normalize_comma, batch_size=2, stats=stats)
        assert stats.tokens == 5
        assert stats.changed == 2
        assert stats.chunks == 3
