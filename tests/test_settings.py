"""Tests for program settings and their resolution to effective values."""

import pytest

from minicam.config import defaults
from minicam.config.settings import (
    CodeGenerationSettings,
    CoolantSettings,
    ProgramConfiguration,
    SpindleSettings,
    parse_int,
    parse_number,
    resolve_configuration,
)


class TestParsing:
    @pytest.mark.parametrize("text, expected", [
        ("10", 10.0),
        ("-2.5", -2.5),
        (" 3.0 ", 3.0),
        (".5", 0.5),
        ("5.", 5.0),
        ("1e3", 1000.0),
        ("+7", 7.0),
    ])
    def test_valid_numbers(self, text, expected):
        assert parse_number(text) == pytest.approx(expected)

    @pytest.mark.parametrize("text", [
        None, "", "   ", "abc", "1,5", "nan", "inf", "1_000", "--1", "1.2.3",
    ])
    def test_invalid_numbers(self, text):
        assert parse_number(text) is None

    def test_parse_int(self):
        assert parse_int("100") == 100
        assert parse_int(" -5 ") == -5
        assert parse_int("1.5") is None
        assert parse_int("") is None
        assert parse_int(None) is None


class TestResolveDefaults:
    def test_empty_configuration(self):
        eff = resolve_configuration(ProgramConfiguration())
        cg = eff.code_generation
        assert cg.use_line_numbers is True
        assert cg.start_line_number == int(defaults.START_LINE_NUMBER)
        assert cg.line_number_step == int(defaults.LINE_NUMBER_STEP)
        assert cg.generate_comments is False
        assert cg.allow_arcs is False
        assert cg.format_commands is False
        assert cg.coordinate_system is None
        assert cg.set_absolute_coordinates is True
        assert cg.allow_relative_coordinates is False
        assert cg.set_zeros_at_start is True
        assert (cg.x0, cg.y0, cg.z0) == (0.0, 0.0, 0.0)
        assert cg.move_to_point_at_end is False
        assert (cg.x, cg.y, cg.z) == (0.0, 0.0, 0.0)
        assert cg.decimal_places == defaults.DECIMAL_PLACES

        assert eff.spindle.enable_command is None
        assert eff.spindle.disable_after_operations is False
        assert eff.coolant.enable_at_start is False
        assert eff.coolant.disable_at_end is False

    def test_resolution_does_not_touch_settings(self):
        cfg = ProgramConfiguration()
        resolve_configuration(cfg)
        assert cfg.code_generation.start_line_number is None
        assert cfg.spindle.spindle_enable_command is None


class TestResolveCodeGeneration:
    def test_bad_line_numbers_fall_back(self):
        cfg = ProgramConfiguration(CodeGenerationSettings(
            start_line_number="x", line_number_step="2.5"))
        cg = resolve_configuration(cfg).code_generation
        assert cg.start_line_number == int(defaults.START_LINE_NUMBER)
        assert cg.line_number_step == int(defaults.LINE_NUMBER_STEP)

    def test_wcs_only_when_enabled(self):
        cfg = ProgramConfiguration(CodeGenerationSettings(set_work_coordinate_system=True))
        assert resolve_configuration(cfg).code_generation.coordinate_system == "G54"
        cfg.code_generation.coordinate_system = "G57"
        assert resolve_configuration(cfg).code_generation.coordinate_system == "G57"
        cfg.code_generation.coordinate_system = "  "
        assert resolve_configuration(cfg).code_generation.coordinate_system is None

    def test_empty_and_bad_coordinates_are_absent(self):
        cfg = ProgramConfiguration(CodeGenerationSettings(x0="10", y0="", z0="oops"))
        cg = resolve_configuration(cfg).code_generation
        assert (cg.x0, cg.y0, cg.z0) == (10.0, None, None)

    def test_negative_decimals_clamped(self):
        cfg = ProgramConfiguration(CodeGenerationSettings(decimal_places=-2))
        assert resolve_configuration(cfg).code_generation.decimal_places == 0

    @pytest.mark.parametrize("decimals", [400, 10**9])
    def test_huge_decimals_capped(self, decimals):
        cfg = ProgramConfiguration(CodeGenerationSettings(decimal_places=decimals))
        cg = resolve_configuration(cfg).code_generation
        assert cg.decimal_places == defaults.MAX_DECIMAL_PLACES


class TestResolveSpindle:
    def _spindle(self, **kwargs) -> SpindleSettings:
        base = dict(add_spindle_code=True, enable_spindle_before_operations=True)
        base.update(kwargs)
        return SpindleSettings(**base)

    def test_master_switch(self):
        s = SpindleSettings(enable_spindle_before_operations=True,
                            disable_spindle_after_operations=True)
        eff = resolve_configuration(ProgramConfiguration(spindle=s)).spindle
        assert eff.enable_command is None
        assert eff.disable_after_operations is False

    def test_default_command(self):
        eff = resolve_configuration(ProgramConfiguration(spindle=self._spindle())).spindle
        assert eff.enable_command == "M3"
        assert eff.speed is None
        assert eff.delay_word is None

    def test_speed(self):
        s = self._spindle(set_spindle_speed=True)
        assert resolve_configuration(ProgramConfiguration(spindle=s)).spindle.speed == "1000"
        s.spindle_speed = "fast"
        assert resolve_configuration(ProgramConfiguration(spindle=s)).spindle.speed is None

    @pytest.mark.parametrize("param, word", [
        (None, "F2"),
        ("P", "P2"),
        ("Pxx.", "P2"),
    ])
    def test_delay_word(self, param, word):
        s = self._spindle(add_spindle_delay_after_enable=True,
                          spindle_delay_parameter=param)
        assert resolve_configuration(ProgramConfiguration(spindle=s)).spindle.delay_word == word

    def test_delay_needs_value(self):
        s = self._spindle(add_spindle_delay_after_enable=True, spindle_delay_value="")
        assert resolve_configuration(ProgramConfiguration(spindle=s)).spindle.delay_word is None


class TestResolveCoolant:
    def test_flags_need_master_switch(self):
        c = CoolantSettings(enable_coolant_at_start=True, disable_coolant_at_end=True)
        eff = resolve_configuration(ProgramConfiguration(coolant=c)).coolant
        assert not eff.enable_at_start and not eff.disable_at_end
        c.add_coolant_code = True
        eff = resolve_configuration(ProgramConfiguration(coolant=c)).coolant
        assert eff.enable_at_start and eff.disable_at_end


class TestDictRoundTrip:
    def test_from_camel_case(self):
        cfg = ProgramConfiguration.from_dict({
            "CodeGeneration": {"UseLineNumbers": False, "X0": "5", "DecimalPlaces": 2,
                               "SomethingElse": 1},
            "Spindle": {"AddSpindleCode": True, "SpindleEnableCommand": "M4"},
        })
        assert cfg.code_generation.use_line_numbers is False
        assert cfg.code_generation.x0 == "5"
        assert cfg.code_generation.decimal_places == 2
        assert cfg.spindle.spindle_enable_command == "M4"
        assert cfg.coolant == CoolantSettings()

    def test_to_dict_keeps_unset(self):
        data = ProgramConfiguration(coolant=CoolantSettings(add_coolant_code=True)).to_dict()
        assert data["coolant"]["add_coolant_code"] is True
        assert data["code_generation"]["x0"] is None
        assert ProgramConfiguration.from_dict(data) == ProgramConfiguration(
            coolant=CoolantSettings(add_coolant_code=True))
