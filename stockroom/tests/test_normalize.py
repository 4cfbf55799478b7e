"""
Tests for catalog normalization helpers.
"""

import pytest

from stockroom.normalize import match_key, norm, norm_brand, pretty, split_list


class TestNorm:
    """Comparison form."""

    @pytest.mark.parametrize('value, expected', [
        ('  spring   bed ', 'SPRING BED'),
        ('Spring\tBed', 'SPRING BED'),
        ('SPRING BED', 'SPRING BED'),
        ('', ''),
        (None, ''),
        (160, '160'),
    ])
    def test_norm(self, value, expected):
        assert norm(value) == expected

    def test_spellings_collide(self):
        """Hand-typed variants of one brand compare equal."""
        assert norm_brand('comforta ') == norm_brand(' COMFORTA') == norm_brand('Comforta')

    def test_idempotent(self):
        assert norm(norm(' a  b ')) == norm(' a  b ')


class TestPretty:
    """Display form."""

    @pytest.mark.parametrize('value, expected', [
        ('  spring   bed ', 'Spring Bed'),
        ('spring BED', 'Spring BED'),
        ('kasur busa-super', 'Kasur Busa-Super'),
        ('90x200', '90x200'),
        (None, ''),
    ])
    def test_pretty(self, value, expected):
        assert pretty(value) == expected


class TestMatchKey:

    def test_parts_normalized(self):
        assert match_key(' mattress', 'matras', 'Comforta', '90x200') == 'MATTRESS|MATRAS|COMFORTA|90X200'

    def test_missing_parts(self):
        """None parts keep their slot."""
        assert match_key('Sofa', None, None, '') == 'SOFA|||'


class TestSplitList:

    @pytest.mark.parametrize('value, expected', [
        ('160x200, 180x200 ,', ['160x200', '180x200']),
        (['a', ' b ', ''], ['a', 'b']),
        ('', []),
        (None, []),
    ])
    def test_split(self, value, expected):
        assert split_list(value) == expected
