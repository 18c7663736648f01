import pytest

from stagepass.platform.logging.loguru_io_utils import (
    MASK,
    masked,
    mask_sensitive,
    should_mask_keyword,
    truncate_content,
)


@pytest.mark.unit
class TestMaskSensitive:
    def test_masks_password_in_repr(self) -> None:
        masked = mask_sensitive("LoginRequest(email='a@b.com', password='hunter22')")

        assert 'hunter22' not in masked
        assert MASK in masked
        assert 'a@b.com' in masked

    def test_masks_token_assignment(self) -> None:
        masked = mask_sensitive('token=abc.def.ghi')

        assert 'abc.def.ghi' not in masked

    def test_leaves_clean_data_untouched(self) -> None:
        data = {'concert_id': 1, 'quantity': 2}

        assert mask_sensitive(data) is data

    def test_keyword_masking(self) -> None:
        assert should_mask_keyword('password', 'secret') == MASK
        assert should_mask_keyword('quantity', 2) == 2

    def test_truncate(self) -> None:
        assert truncate_content('short') == 'short'
        assert truncate_content('x' * 600).endswith('(truncated 100 chars)')

    def test_masked_walks_containers(self) -> None:
        result = masked(({'email': 'a@b.com', 'password': 'hunter22'}, ['token=abc']))

        assert result == ({'email': 'a@b.com', 'password': MASK}, [f"token='{MASK}'"])
