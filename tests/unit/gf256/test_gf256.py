import pytest

from qrmatrix.gf256 import EXP_TABLE, LOG_TABLE, gexp, glog


def test_exp_of_log_is_identity():
    for n in range(1, 256):
        assert gexp(glog(n)) == n


def test_log_of_exp_is_identity():
    for i in range(255):
        assert glog(gexp(i)) == i


def test_exp_log_200():
    assert gexp(glog(200)) == 200


def test_tables_follow_primitive_polynomial():
    assert EXP_TABLE[:9] == (1, 2, 4, 8, 16, 32, 64, 128, 0x1D)
    # alpha generates every non-zero element exactly once
    assert sorted(EXP_TABLE[:255]) == list(range(1, 256))
    assert LOG_TABLE[1] == 0


def test_gexp_normalizes_out_of_range_exponents():
    assert gexp(255) == gexp(0) == 1
    assert gexp(-1) == EXP_TABLE[254]
    assert gexp(256 + 3) == gexp(4)
    assert gexp(-255 * 3 + 7) == gexp(7)


def test_glog_rejects_zero():
    with pytest.raises(ValueError):
        glog(0)


def test_tables_are_read_only():
    assert isinstance(EXP_TABLE, tuple)
    assert isinstance(LOG_TABLE, tuple)
    with pytest.raises(TypeError):
        EXP_TABLE[0] = 7
    with pytest.raises(TypeError):
        LOG_TABLE[1] = 7
