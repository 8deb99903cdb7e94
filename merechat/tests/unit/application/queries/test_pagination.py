"""normalize_page Unit Tests."""

import pytest

from merechat.application.chat.queries import normalize_page


class TestNormalizePage:
    """limit/skip 정규화 테스트."""

    def test_defaults(self) -> None:
        page = normalize_page(None, None)

        assert page.limit == 50
        assert page.skip == 0

    def test_parses_query_strings(self) -> None:
        page = normalize_page("2", "4")

        assert page.limit == 2
        assert page.skip == 4

    @pytest.mark.parametrize("raw", ["abc", "", "0", "-3", "1.5"])
    def test_unparsable_limit_falls_back(self, raw: str) -> None:
        assert normalize_page(raw, None).limit == 50

    @pytest.mark.parametrize("raw", ["abc", "-1"])
    def test_unparsable_skip_falls_back(self, raw: str) -> None:
        assert normalize_page(None, raw).skip == 0

    def test_limit_capped(self) -> None:
        assert normalize_page("10000", None, max_limit=200).limit == 200

    def test_skip_clamped_to_bigint(self) -> None:
        assert normalize_page(None, str(2**64)).skip == 2**63 - 1
