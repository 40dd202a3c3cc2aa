import pytest

from minic.platform_arm32 import (
    FP_REG_NO,
    LX_REG_NO,
    MAX_REG_NUM,
    SP_REG_NO,
    TMP_REG_NO,
    const_expr,
    is_disp,
    is_reg,
    reg_name,
)


def test_special_register_names():
    assert reg_name(FP_REG_NO) == "fp"
    assert reg_name(SP_REG_NO) == "sp"
    assert reg_name(LX_REG_NO) == "lr"
    assert reg_name(TMP_REG_NO) == "r10"
    assert reg_name(0) == "r0"


def test_every_register_name_is_a_register():
    assert all(is_reg(reg_name(no)) for no in range(MAX_REG_NUM))


@pytest.mark.parametrize("name", ["r11", "r16", "R0", "", "x0"])
def test_unknown_names_are_not_registers(name):
    assert is_reg(name) is False


@pytest.mark.parametrize("reg_no", [-1, MAX_REG_NUM])
def test_reg_name_out_of_range(reg_no):
    with pytest.raises(ValueError):
        reg_name(reg_no)


@pytest.mark.parametrize("num", [0, 1, 0xFF, -16, 4096, -4096, 0x100])
def test_encodable_immediates(num):
    assert const_expr(num) is True


@pytest.mark.parametrize("num", [257, -257, 0x101, 0x12345678])
def test_unencodable_immediates(num):
    assert const_expr(num) is False


def test_const_expr_symmetric_in_sign():
    for num in range(-600, 600):
        assert const_expr(num) == const_expr(-num)


@pytest.mark.parametrize("num,expected", [(0, True), (4095, True), (-4095, True), (4096, False), (-4096, False)])
def test_displacement_bounds(num, expected):
    assert is_disp(num) is expected