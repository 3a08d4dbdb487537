from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from models.taxpayer import FilingStatus

logger = logging.getLogger(__name__)

BracketTable = Dict[str, List[Tuple[float, float]]]

DEFAULT_PARAMETERS_DIR = Path(__file__).parent.parent / "config" / "tax_parameters"


@dataclass(frozen=True)
class TaxYearConfig:
    """
    Federal constants for a given tax year.

    Every per-status table is keyed by ``FilingStatus.value``. Bracket
    tables are ascending ``(floor, rate)`` pairs; a bracket's ceiling is
    the next bracket's floor and the last bracket is unbounded.

    NOTE: Values here should be reviewed annually against IRS published figures.
    """

    tax_year: int
    ordinary_income_brackets: BracketTable
    standard_deduction: Dict[str, float]

    # Long-term capital gain / qualified dividend brackets (0%, 15%, 20%)
    capital_gains_brackets: BracketTable

    # Self-employment (Schedule SE)
    se_net_earnings_factor: float = 0.9235  # 92.35%
    ss_rate: float = 0.124  # 12.4% Social Security (up to wage base)
    medicare_rate: float = 0.029  # 2.9% Medicare (no wage base limit)
    ss_wage_base: float = 147000.0
    se_deductible_share: float = 0.5

    # Additional Medicare Tax (0.9% on SE income over threshold)
    additional_medicare_tax_rate: float = 0.009
    additional_medicare_threshold: Optional[Dict[str, float]] = None

    # Net Investment Income Tax (3.8% on lesser of NII or AGI over threshold)
    niit_rate: float = 0.038
    niit_threshold: Optional[Dict[str, float]] = None

    def brackets_for(self, filing_status: FilingStatus) -> List[Tuple[float, float]]:
        return self.ordinary_income_brackets.get(
            filing_status.value, self.ordinary_income_brackets[FilingStatus.SINGLE.value]
        )

    def capital_gains_brackets_for(self, filing_status: FilingStatus) -> List[Tuple[float, float]]:
        return self.capital_gains_brackets.get(
            filing_status.value, self.capital_gains_brackets[FilingStatus.SINGLE.value]
        )

    def standard_deduction_for(self, filing_status: FilingStatus) -> float:
        return self.standard_deduction.get(
            filing_status.value, self.standard_deduction[FilingStatus.SINGLE.value]
        )

    def additional_medicare_threshold_for(self, filing_status: FilingStatus) -> float:
        table = self.additional_medicare_threshold or {}
        return table.get(filing_status.value, table.get(FilingStatus.SINGLE.value, 200000.0))

    def niit_threshold_for(self, filing_status: FilingStatus) -> float:
        table = self.niit_threshold or {}
        return table.get(filing_status.value, table.get(FilingStatus.SINGLE.value, 200000.0))

    @staticmethod
    def for_2025() -> "TaxYearConfig":
        """
        2025 federal tables as used by the engine.

        The ordinary brackets and standard deductions are the figures the
        filing product shipped with; they are deliberately kept in one
        place so an annual update touches nothing else.
        """
        single = [
            (0.0, 0.10),
            (11000.0, 0.12),
            (44725.0, 0.22),
            (95375.0, 0.24),
            (182050.0, 0.32),
            (231250.0, 0.35),
            (578100.0, 0.37),
        ]
        married_joint = [
            (0.0, 0.10),
            (22000.0, 0.12),
            (89450.0, 0.22),
            (190750.0, 0.24),
            (364200.0, 0.32),
            (462500.0, 0.35),
            (693750.0, 0.37),
        ]
        married_separate = [
            (0.0, 0.10),
            (11000.0, 0.12),
            (44725.0, 0.22),
            (95375.0, 0.24),
            (182100.0, 0.32),
            (231250.0, 0.35),
            (346875.0, 0.37),
        ]
        head_of_household = [
            (0.0, 0.10),
            (15700.0, 0.12),
            (59850.0, 0.22),
            (95350.0, 0.24),
            (182050.0, 0.32),
            (231250.0, 0.35),
            (578100.0, 0.37),
        ]

        cg_single = [(0.0, 0.0), (44725.0, 0.15), (492300.0, 0.20)]
        cg_joint = [(0.0, 0.0), (89450.0, 0.15), (553850.0, 0.20)]
        cg_separate = [(0.0, 0.0), (44725.0, 0.15), (276900.0, 0.20)]
        cg_hoh = [(0.0, 0.0), (59750.0, 0.15), (523050.0, 0.20)]

        return TaxYearConfig(
            tax_year=2025,
            ordinary_income_brackets={
                "single": single,
                "married_joint": married_joint,
                "married_separate": married_separate,
                "head_of_household": head_of_household,
                "qualifying_widow": married_joint,
            },
            standard_deduction={
                "single": 13850.0,
                "married_joint": 27700.0,
                "married_separate": 13850.0,
                "head_of_household": 20800.0,
                "qualifying_widow": 27700.0,
            },
            capital_gains_brackets={
                "single": cg_single,
                "married_joint": cg_joint,
                "married_separate": cg_separate,
                "head_of_household": cg_hoh,
                "qualifying_widow": cg_joint,
            },
            ss_wage_base=147000.0,
            additional_medicare_threshold={
                "single": 200000.0,
                "married_joint": 250000.0,
                "married_separate": 125000.0,
                "head_of_household": 200000.0,
                "qualifying_widow": 200000.0,
            },
            niit_threshold={
                "single": 200000.0,
                "married_joint": 250000.0,
                "married_separate": 125000.0,
                "head_of_household": 200000.0,
                "qualifying_widow": 250000.0,
            },
        )

    @staticmethod
    def for_year(tax_year: int, parameters_dir: Optional[Path] = None) -> "TaxYearConfig":
        """
        Load tax configuration for a tax year.

        2025 is built inline. Any other year is read from
        ``tax_year_{year}.yaml`` in ``parameters_dir`` (default: the
        ``TAX_ENGINE_TAX_PARAMETERS_DIR`` setting, else src/config/tax_parameters).

        Raises:
            ValueError: If the parameters directory does not exist
            FileNotFoundError: If the year's YAML file is missing
        """
        if tax_year == 2025:
            return TaxYearConfig.for_2025()

        if parameters_dir is None:
            from config.settings import get_settings
            parameters_dir = get_settings().tax_parameters_dir or DEFAULT_PARAMETERS_DIR

        config_dir = Path(parameters_dir)
        if not config_dir.is_dir():
            raise ValueError(
                f"Tax year {tax_year} is not built in and the tax parameters "
                f"directory {config_dir} does not exist"
            )

        yaml_file = config_dir / f"tax_year_{tax_year}.yaml"
        if not yaml_file.exists():
            raise FileNotFoundError(
                f"Tax configuration file not found: {yaml_file}. "
                f"Please ensure tax_year_{tax_year}.yaml exists."
            )

        import yaml

        logger.info(f"Loading tax config from {yaml_file}")
        with open(yaml_file, "r") as f:
            data = yaml.safe_load(f) or {}

        return TaxYearConfig._from_mapping(tax_year, data)

    @staticmethod
    def _from_mapping(tax_year: int, data: Dict[str, Any]) -> "TaxYearConfig":
        base = TaxYearConfig.for_2025()

        # YAML bracket format [threshold, rate] -> (threshold, rate)
        def convert_brackets(yaml_brackets: Optional[dict]) -> Optional[BracketTable]:
            if not yaml_brackets:
                return None
            converted = {}
            for status, brackets in yaml_brackets.items():
                converted[status] = sorted((float(b[0]), float(b[1])) for b in brackets)
            return converted

        def convert_amounts(yaml_amounts: Optional[dict]) -> Optional[Dict[str, float]]:
            if not yaml_amounts:
                return None
            return {k: float(v) for k, v in yaml_amounts.items()}

        brackets = convert_brackets(data.get("ordinary_income_brackets"))
        if not brackets:
            raise ValueError(f"tax_year_{tax_year}.yaml defines no ordinary_income_brackets")

        # Add (0, 0.10) as the first bracket if not present
        for status in brackets:
            if brackets[status] and brackets[status][0][0] != 0:
                brackets[status].insert(0, (0.0, 0.10))

        return TaxYearConfig(
            tax_year=tax_year,
            ordinary_income_brackets=brackets,
            standard_deduction=convert_amounts(data.get("standard_deduction")) or base.standard_deduction,
            capital_gains_brackets=(
                convert_brackets(data.get("capital_gains_brackets")) or base.capital_gains_brackets
            ),
            ss_wage_base=float(data.get("ss_wage_base", base.ss_wage_base)),
            additional_medicare_threshold=(
                convert_amounts(data.get("additional_medicare_threshold"))
                or base.additional_medicare_threshold
            ),
            niit_threshold=convert_amounts(data.get("niit_threshold")) or base.niit_threshold,
        )
