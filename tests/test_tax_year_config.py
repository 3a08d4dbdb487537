"""Tests for federal tax year configuration and YAML loading."""

import pytest

from calculator.engine import FederalTaxEngine
from calculator.tax_year_config import TaxYearConfig
from models.ledger import TaxDocumentData
from models.taxpayer import FilingStatus


TAX_YEAR_2026_YAML = """
ordinary_income_brackets:
  single:
    - [12000, 0.12]
    - [48000, 0.22]
  married_joint:
    - [0, 0.10]
    - [24000, 0.12]
standard_deduction:
  single: 15000
  married_joint: 30000
ss_wage_base: 180000
"""


class TestBuiltInYear:
    def test_for_year_2025_is_built_in(self, tmp_path):
        # No YAML is consulted for the built-in year
        config = TaxYearConfig.for_year(2025, parameters_dir=tmp_path / "missing")
        assert config == TaxYearConfig.for_2025()

    def test_standard_deductions(self):
        config = TaxYearConfig.for_2025()
        assert config.standard_deduction_for(FilingStatus.SINGLE) == 13850.0
        assert config.standard_deduction_for(FilingStatus.MARRIED_JOINT) == 27700.0
        assert config.standard_deduction_for(FilingStatus.HEAD_OF_HOUSEHOLD) == 20800.0

    def test_brackets_ascend_from_zero(self):
        config = TaxYearConfig.for_2025()
        for status in FilingStatus:
            floors = [floor for floor, _ in config.brackets_for(status)]
            assert floors[0] == 0.0
            assert floors == sorted(floors)

    def test_thresholds(self):
        config = TaxYearConfig.for_2025()
        assert config.additional_medicare_threshold_for(FilingStatus.MARRIED_SEPARATE) == 125000.0
        assert config.niit_threshold_for(FilingStatus.MARRIED_JOINT) == 250000.0


class TestYamlLoading:
    def test_loads_year_file(self, tmp_path):
        (tmp_path / "tax_year_2026.yaml").write_text(TAX_YEAR_2026_YAML)

        config = TaxYearConfig.for_year(2026, parameters_dir=tmp_path)

        assert config.tax_year == 2026
        assert config.standard_deduction_for(FilingStatus.SINGLE) == 15000.0
        assert config.ss_wage_base == 180000.0

    def test_missing_zero_bracket_is_added(self, tmp_path):
        (tmp_path / "tax_year_2026.yaml").write_text(TAX_YEAR_2026_YAML)

        config = TaxYearConfig.for_year(2026, parameters_dir=tmp_path)

        assert config.brackets_for(FilingStatus.SINGLE) == [
            (0.0, 0.10), (12000.0, 0.12), (48000.0, 0.22)
        ]
        assert config.brackets_for(FilingStatus.MARRIED_JOINT)[0] == (0.0, 0.10)

    def test_unlisted_tables_fall_back_to_2025(self, tmp_path):
        (tmp_path / "tax_year_2026.yaml").write_text(TAX_YEAR_2026_YAML)

        config = TaxYearConfig.for_year(2026, parameters_dir=tmp_path)
        base = TaxYearConfig.for_2025()

        assert config.capital_gains_brackets == base.capital_gains_brackets
        assert config.niit_threshold == base.niit_threshold
        # Statuses missing from the file use the single table
        assert config.brackets_for(FilingStatus.HEAD_OF_HOUSEHOLD) == config.brackets_for(FilingStatus.SINGLE)

    def test_engine_uses_loaded_year(self, tmp_path):
        (tmp_path / "tax_year_2026.yaml").write_text(TAX_YEAR_2026_YAML)
        engine = FederalTaxEngine(TaxYearConfig.for_year(2026, parameters_dir=tmp_path))

        result = engine.calculate(TaxDocumentData.from_totals(wages=40000.0))

        # 25000 taxable: 1200 + 13000 * 0.12
        assert result.summary.taxable_income == 25000.0
        assert result.summary.total_tax_liability == 2760.0
        assert result.metadata.tax_year == 2026

    def test_directory_from_settings(self, tmp_path, monkeypatch):
        (tmp_path / "tax_year_2026.yaml").write_text(TAX_YEAR_2026_YAML)
        monkeypatch.setenv("TAX_ENGINE_TAX_PARAMETERS_DIR", str(tmp_path))

        assert TaxYearConfig.for_year(2026).tax_year == 2026

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="tax_year_2030.yaml"):
            TaxYearConfig.for_year(2030, parameters_dir=tmp_path)

    def test_missing_directory(self, tmp_path):
        with pytest.raises(ValueError, match="does not exist"):
            TaxYearConfig.for_year(2030, parameters_dir=tmp_path / "nope")

    def test_file_without_brackets(self, tmp_path):
        (tmp_path / "tax_year_2027.yaml").write_text("standard_deduction:\n  single: 16000\n")

        with pytest.raises(ValueError, match="ordinary_income_brackets"):
            TaxYearConfig.for_year(2027, parameters_dir=tmp_path)
