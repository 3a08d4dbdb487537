"""
2025 state income tax tables.

Filing statuses not listed in a table (qualifying widow) use the single
figures. Flat-tax states carry one bracket whose floor is the exempt
amount. New Mexico has no table and is reported as unsupported.

NOTE: Values here should be reviewed annually against each state's published figures.
"""

from typing import Dict, List, Tuple

from calculator.state.state_registry import register_state
from calculator.state.state_tax_config import (
    CreditCondition,
    PersonalExemption,
    SpecialTaxType,
    StateCredit,
    StateTaxConfig,
    StateTaxType,
)

TAX_YEAR = 2025

Brackets = List[Tuple[float, float]]


def _by_status(single: Brackets, joint: Brackets, separate: Brackets, hoh: Brackets) -> Dict[str, Brackets]:
    return {
        "single": single,
        "married_joint": joint,
        "married_separate": separate,
        "head_of_household": hoh,
    }


def _all_statuses(brackets: Brackets) -> Dict[str, Brackets]:
    return _by_status(brackets, brackets, brackets, brackets)


def _flat(rate: float) -> Dict[str, Brackets]:
    return _all_statuses([(0, rate)])


def _deduction(single: float, joint: float, separate: float, hoh: float) -> Dict[str, float]:
    return {
        "single": single,
        "married_joint": joint,
        "married_separate": separate,
        "head_of_household": hoh,
    }


def _exemption(taxpayer: float, spouse: float, dependent: float) -> PersonalExemption:
    return PersonalExemption(taxpayer=taxpayer, spouse=spouse, dependent=dependent)


def _state(state_code: str, state_name: str, tax_type: StateTaxType, **kwargs) -> StateTaxConfig:
    return register_state(
        StateTaxConfig(
            state_code=state_code,
            state_name=state_name,
            tax_year=TAX_YEAR,
            tax_type=tax_type,
            **kwargs,
        )
    )


# =============================================================================
# NO INCOME TAX
# =============================================================================

ALASKA = _state("AK", "Alaska", StateTaxType.NO_TAX)
FLORIDA = _state("FL", "Florida", StateTaxType.NO_TAX)
NEVADA = _state("NV", "Nevada", StateTaxType.NO_TAX)
SOUTH_DAKOTA = _state("SD", "South Dakota", StateTaxType.NO_TAX)
TENNESSEE = _state("TN", "Tennessee", StateTaxType.NO_TAX)
TEXAS = _state("TX", "Texas", StateTaxType.NO_TAX)
WYOMING = _state("WY", "Wyoming", StateTaxType.NO_TAX)
NEW_HAMPSHIRE = _state(
    "NH", "New Hampshire", StateTaxType.NO_TAX,
    notes=("New Hampshire eliminated the dividends and interest tax in 2025",),
)

# =============================================================================
# SPECIAL
# =============================================================================

WASHINGTON = _state(
    "WA", "Washington", StateTaxType.SPECIAL,
    special_tax_type=SpecialTaxType.CAPITAL_GAINS,
    rate=0.07,
    exemption=262500,
    notes=("Only taxes capital gains income over $262,500 (2025)",),
)

# =============================================================================
# FLAT
# =============================================================================

ARIZONA = _state(
    "AZ", "Arizona", StateTaxType.FLAT,
    brackets=_flat(0.025),
    standard_deduction=_deduction(15000, 30000, 15000, 22500),
    uses_federal_agi=True,
    credits=(
        StateCredit("Dependent Credit (Under 17)", 100, condition=CreditCondition.DEPENDENT_UNDER_17),
        StateCredit("Dependent Credit (17 and Over)", 25, condition=CreditCondition.DEPENDENT_OVER_17),
    ),
)

COLORADO = _state(
    "CO", "Colorado", StateTaxType.FLAT,
    brackets=_flat(0.044),
    standard_deduction=_deduction(15000, 30000, 15000, 22500),
    uses_federal_agi=True,
)

GEORGIA = _state(
    "GA", "Georgia", StateTaxType.FLAT,
    brackets=_flat(0.0549),
    standard_deduction=_deduction(12400, 24800, 12400, 18600),
    personal_exemption=_exemption(3100, 3100, 3100),
)

ILLINOIS = _state(
    "IL", "Illinois", StateTaxType.FLAT,
    brackets=_flat(0.0495),
    personal_exemption=_exemption(2850, 2850, 2850),
)

INDIANA = _state(
    "IN", "Indiana", StateTaxType.FLAT,
    brackets=_flat(0.0305),
    personal_exemption=_exemption(1000, 1000, 1000),
)

IOWA = _state(
    "IA", "Iowa", StateTaxType.FLAT,
    brackets=_flat(0.0367),
    standard_deduction=_deduction(2450, 6050, 3025, 4550),
    personal_exemption=_exemption(40, 40, 40),
    notes=("Iowa transitioned to a flat tax rate of 3.67% in 2025",),
)

KENTUCKY = _state(
    "KY", "Kentucky", StateTaxType.FLAT,
    brackets=_flat(0.04),
    standard_deduction=_deduction(2970, 5940, 2970, 4455),
)

MASSACHUSETTS = _state(
    "MA", "Massachusetts", StateTaxType.FLAT,
    brackets=_flat(0.05),
    personal_exemption=_exemption(4400, 4400, 1000),
)

MICHIGAN = _state(
    "MI", "Michigan", StateTaxType.FLAT,
    brackets=_flat(0.0425),
    personal_exemption=_exemption(5800, 5800, 5800),
)

NORTH_CAROLINA = _state(
    "NC", "North Carolina", StateTaxType.FLAT,
    brackets=_flat(0.045),
    standard_deduction=_deduction(13150, 26300, 13150, 19725),
)

PENNSYLVANIA = _state(
    "PA", "Pennsylvania", StateTaxType.FLAT,
    brackets=_flat(0.0307),
)

UTAH = _state(
    "UT", "Utah", StateTaxType.FLAT,
    brackets=_flat(0.0495),
    standard_deduction=_deduction(15000, 30000, 15000, 22500),
    personal_exemption=_exemption(0, 0, 0),
    uses_federal_agi=True,
    allows_itemization=True,
    notes=("Utah has a flat 4.95% income tax rate for 2025",),
)

# =============================================================================
# PROGRESSIVE
# =============================================================================

ALABAMA = _state(
    "AL", "Alabama", StateTaxType.PROGRESSIVE,
    brackets=_by_status(
        single=[(0, 0.02), (500, 0.04), (3000, 0.05)],
        joint=[(0, 0.02), (1000, 0.04), (6000, 0.05)],
        separate=[(0, 0.02), (500, 0.04), (3000, 0.05)],
        hoh=[(0, 0.02), (750, 0.04), (4500, 0.05)],
    ),
    standard_deduction=_deduction(2500, 7500, 2500, 4700),
    personal_exemption=_exemption(1500, 1500, 300),
)

ARKANSAS = _state(
    "AR", "Arkansas", StateTaxType.PROGRESSIVE,
    brackets=_all_statuses([(0, 0.02), (4900, 0.04), (9800, 0.0475), (14600, 0.0525)]),
    standard_deduction=_deduction(2340, 4680, 2340, 3510),
    personal_exemption=_exemption(29, 29, 29),
)

CALIFORNIA = _state(
    "CA", "California", StateTaxType.PROGRESSIVE,
    brackets=_by_status(
        single=[
            (0, 0.01), (10750, 0.02), (25500, 0.04), (40250, 0.06), (55850, 0.08),
            (70650, 0.093), (361000, 0.103), (433350, 0.113), (722000, 0.123), (1000000, 0.133),
        ],
        joint=[
            (0, 0.01), (21500, 0.02), (51000, 0.04), (80500, 0.06), (111700, 0.08),
            (141300, 0.093), (722000, 0.103), (866700, 0.113), (1000000, 0.123), (1444000, 0.133),
        ],
        separate=[
            (0, 0.01), (10750, 0.02), (25500, 0.04), (40250, 0.06), (55850, 0.08),
            (70650, 0.093), (361000, 0.103), (433350, 0.113), (500000, 0.123), (722000, 0.133),
        ],
        hoh=[
            (0, 0.01), (21500, 0.02), (51000, 0.04), (66250, 0.06), (82650, 0.08),
            (97350, 0.093), (722000, 0.103), (866700, 0.113), (1000000, 0.123), (1444000, 0.133),
        ],
    ),
    standard_deduction=_deduction(5540, 11080, 5540, 8335),
    personal_exemption=_exemption(158, 158, 486),
    notes=("Additional 1.1% payroll tax on wages brings effective top rate to 14.4%",),
)

CONNECTICUT = _state(
    "CT", "Connecticut", StateTaxType.PROGRESSIVE,
    brackets=_by_status(
        single=[(0, 0.03), (10000, 0.05), (50000, 0.055), (100000, 0.06), (200000, 0.065), (250000, 0.069),
                (500000, 0.0699)],
        joint=[(0, 0.03), (20000, 0.05), (100000, 0.055), (200000, 0.06), (400000, 0.065), (500000, 0.069),
               (1000000, 0.0699)],
        separate=[(0, 0.03), (10000, 0.05), (50000, 0.055), (100000, 0.06), (200000, 0.065), (250000, 0.069),
                  (500000, 0.0699)],
        hoh=[(0, 0.03), (16000, 0.05), (80000, 0.055), (160000, 0.06), (320000, 0.065), (400000, 0.069),
             (800000, 0.0699)],
    ),
    standard_deduction=_deduction(15000, 30000, 15000, 22500),
    personal_exemption=_exemption(15000, 15000, 0),
)

DELAWARE = _state(
    "DE", "Delaware", StateTaxType.PROGRESSIVE,
    brackets=_all_statuses([
        (0, 0.0), (2000, 0.022), (5000, 0.039), (10000, 0.048), (20000, 0.052), (25000, 0.0555), (60000, 0.066),
    ]),
    standard_deduction=_deduction(3250, 6500, 3250, 4875),
    personal_exemption=_exemption(110, 110, 110),
)

DISTRICT_OF_COLUMBIA = _state(
    "DC", "District of Columbia", StateTaxType.PROGRESSIVE,
    brackets=_all_statuses([
        (0, 0.04), (10000, 0.06), (40000, 0.065), (60000, 0.085), (350000, 0.0925), (1000000, 0.1075),
    ]),
    standard_deduction=_deduction(14850, 29700, 14850, 22275),
    personal_exemption=_exemption(1775, 1775, 1775),
)

HAWAII = _state(
    "HI", "Hawaii", StateTaxType.PROGRESSIVE,
    brackets=_by_status(
        single=[
            (0, 0.014), (2400, 0.032), (4800, 0.055), (9600, 0.064), (14400, 0.068), (19200, 0.072),
            (24000, 0.076), (36000, 0.079), (48000, 0.0825), (150000, 0.09), (175000, 0.10), (200000, 0.11),
        ],
        joint=[
            (0, 0.014), (4800, 0.032), (9600, 0.055), (19200, 0.064), (28800, 0.068), (38400, 0.072),
            (48000, 0.076), (72000, 0.079), (96000, 0.0825), (300000, 0.09), (350000, 0.10), (400000, 0.11),
        ],
        separate=[
            (0, 0.014), (2400, 0.032), (4800, 0.055), (9600, 0.064), (14400, 0.068), (19200, 0.072),
            (24000, 0.076), (36000, 0.079), (48000, 0.0825), (150000, 0.09), (175000, 0.10), (200000, 0.11),
        ],
        hoh=[
            (0, 0.014), (3600, 0.032), (7200, 0.055), (14400, 0.064), (21600, 0.068), (28800, 0.072),
            (36000, 0.076), (54000, 0.079), (72000, 0.0825), (225000, 0.09), (262500, 0.10), (300000, 0.11),
        ],
    ),
    standard_deduction=_deduction(2200, 4400, 2200, 3212),
    personal_exemption=_exemption(1144, 1144, 1144),
)

IDAHO = _state(
    "ID", "Idaho", StateTaxType.PROGRESSIVE,
    brackets=_by_status(
        single=[(0, 0.01), (1700, 0.03), (3400, 0.045), (5100, 0.06), (6800, 0.0675), (8500, 0.069),
                (12750, 0.0695)],
        joint=[(0, 0.01), (3400, 0.03), (6800, 0.045), (10200, 0.06), (13600, 0.0675), (17000, 0.069),
               (25500, 0.0695)],
        separate=[(0, 0.01), (1700, 0.03), (3400, 0.045), (5100, 0.06), (6800, 0.0675), (8500, 0.069),
                  (12750, 0.0695)],
        hoh=[(0, 0.01), (2550, 0.03), (5100, 0.045), (7650, 0.06), (10200, 0.0675), (12750, 0.069),
             (19125, 0.0695)],
    ),
    standard_deduction=_deduction(14600, 29200, 14600, 21900),
)

KANSAS = _state(
    "KS", "Kansas", StateTaxType.PROGRESSIVE,
    brackets=_by_status(
        single=[(0, 0.031), (15000, 0.0525), (30000, 0.057)],
        joint=[(0, 0.031), (30000, 0.0525), (60000, 0.057)],
        separate=[(0, 0.031), (15000, 0.0525), (30000, 0.057)],
        hoh=[(0, 0.031), (22500, 0.0525), (45000, 0.057)],
    ),
    standard_deduction=_deduction(3500, 8750, 4375, 6250),
    personal_exemption=_exemption(2250, 2250, 2250),
)

LOUISIANA = _state(
    "LA", "Louisiana", StateTaxType.PROGRESSIVE,
    brackets=_by_status(
        single=[(0, 0.0185), (12500, 0.035), (50000, 0.0425)],
        joint=[(0, 0.0185), (25000, 0.035), (100000, 0.0425)],
        separate=[(0, 0.0185), (12500, 0.035), (50000, 0.0425)],
        hoh=[(0, 0.0185), (18750, 0.035), (75000, 0.0425)],
    ),
    standard_deduction=_deduction(4500, 9000, 4500, 6750),
    personal_exemption=_exemption(4500, 4500, 1000),
)

MAINE = _state(
    "ME", "Maine", StateTaxType.PROGRESSIVE,
    brackets=_by_status(
        single=[(0, 0.058), (25050, 0.0675), (59600, 0.0715)],
        joint=[(0, 0.058), (50100, 0.0675), (119200, 0.0715)],
        separate=[(0, 0.058), (25050, 0.0675), (59600, 0.0715)],
        hoh=[(0, 0.058), (37575, 0.0675), (89400, 0.0715)],
    ),
    standard_deduction=_deduction(14850, 29700, 14850, 22275),
    personal_exemption=_exemption(5000, 5000, 5000),
)

MARYLAND = _state(
    "MD", "Maryland", StateTaxType.PROGRESSIVE,
    brackets=_by_status(
        single=[(0, 0.02), (1000, 0.03), (2000, 0.04), (3000, 0.0475), (100000, 0.05), (125000, 0.0525),
                (150000, 0.055), (250000, 0.0575)],
        joint=[(0, 0.02), (1000, 0.03), (2000, 0.04), (3000, 0.0475), (150000, 0.05), (175000, 0.0525),
               (225000, 0.055), (300000, 0.0575)],
        separate=[(0, 0.02), (1000, 0.03), (2000, 0.04), (3000, 0.0475), (100000, 0.05), (125000, 0.0525),
                  (150000, 0.055), (250000, 0.0575)],
        hoh=[(0, 0.02), (1000, 0.03), (2000, 0.04), (3000, 0.0475), (150000, 0.05), (175000, 0.0525),
             (225000, 0.055), (300000, 0.0575)],
    ),
    standard_deduction=_deduction(2600, 5200, 2600, 3900),
    personal_exemption=_exemption(3700, 3700, 3700),
)

MINNESOTA = _state(
    "MN", "Minnesota", StateTaxType.PROGRESSIVE,
    brackets=_by_status(
        single=[(0, 0.0535), (31690, 0.0685), (103900, 0.0785), (195430, 0.0985)],
        joint=[(0, 0.0535), (47580, 0.0685), (190320, 0.0785), (284810, 0.0985)],
        separate=[(0, 0.0535), (23790, 0.0685), (95160, 0.0785), (142405, 0.0985)],
        hoh=[(0, 0.0535), (39520, 0.0685), (147110, 0.0785), (240120, 0.0985)],
    ),
    standard_deduction=_deduction(14850, 29700, 14850, 22275),
)

MISSISSIPPI = _state(
    "MS", "Mississippi", StateTaxType.PROGRESSIVE,
    brackets=_all_statuses([(0, 0.0), (5000, 0.04), (10000, 0.05)]),
    standard_deduction=_deduction(2300, 4600, 2300, 3400),
    personal_exemption=_exemption(6000, 6000, 1500),
)

MISSOURI = _state(
    "MO", "Missouri", StateTaxType.PROGRESSIVE,
    brackets=_by_status(
        single=[(0, 0.015), (1141, 0.02), (2281, 0.025), (3422, 0.03), (4563, 0.035), (5704, 0.04),
                (6845, 0.045), (7986, 0.05), (9127, 0.0525)],
        joint=[(0, 0.015), (2281, 0.02), (4562, 0.025), (6843, 0.03), (9124, 0.035), (11405, 0.04),
               (13686, 0.045), (15967, 0.05), (18248, 0.0525)],
        separate=[(0, 0.015), (1141, 0.02), (2281, 0.025), (3422, 0.03), (4563, 0.035), (5704, 0.04),
                  (6845, 0.045), (7986, 0.05), (9127, 0.0525)],
        hoh=[(0, 0.015), (1711, 0.02), (3422, 0.025), (5133, 0.03), (6844, 0.035), (8555, 0.04),
             (10266, 0.045), (11977, 0.05), (13688, 0.0525)],
    ),
    standard_deduction=_deduction(13850, 27700, 13850, 20800),
    personal_exemption=_exemption(2100, 2100, 1200),
)

MONTANA = _state(
    "MT", "Montana", StateTaxType.PROGRESSIVE,
    brackets=_by_status(
        single=[(0, 0.01), (3300, 0.02), (5800, 0.03), (8800, 0.04), (11500, 0.05), (14700, 0.06),
                (19000, 0.0675)],
        joint=[(0, 0.01), (6600, 0.02), (11600, 0.03), (17600, 0.04), (23000, 0.05), (29400, 0.06),
               (38000, 0.0675)],
        separate=[(0, 0.01), (3300, 0.02), (5800, 0.03), (8800, 0.04), (11500, 0.05), (14700, 0.06),
                  (19000, 0.0675)],
        hoh=[(0, 0.01), (4950, 0.02), (8700, 0.03), (13200, 0.04), (17250, 0.05), (22050, 0.06),
             (28500, 0.0675)],
    ),
    standard_deduction=_deduction(5740, 11480, 5740, 8610),
    personal_exemption=_exemption(3160, 3160, 3160),
)

NEBRASKA = _state(
    "NE", "Nebraska", StateTaxType.PROGRESSIVE,
    brackets=_by_status(
        single=[(0, 0.0246), (3700, 0.0351), (22170, 0.0501), (35730, 0.0584)],
        joint=[(0, 0.0246), (7390, 0.0351), (44350, 0.0501), (71460, 0.0584)],
        separate=[(0, 0.0246), (3700, 0.0351), (22170, 0.0501), (35730, 0.0584)],
        hoh=[(0, 0.0246), (5540, 0.0351), (33260, 0.0501), (53590, 0.0584)],
    ),
    standard_deduction=_deduction(8100, 16200, 8100, 12150),
    personal_exemption=_exemption(156, 156, 156),
)

NEW_JERSEY = _state(
    "NJ", "New Jersey", StateTaxType.PROGRESSIVE,
    brackets=_by_status(
        single=[(0, 0.014), (20650, 0.0175), (36200, 0.035), (41350, 0.05525), (77550, 0.0637),
                (517500, 0.0897), (1035000, 0.1075)],
        joint=[(0, 0.014), (20650, 0.0175), (51700, 0.0245), (72400, 0.035), (82700, 0.05525),
               (155100, 0.0637), (517500, 0.0897), (1035000, 0.1075)],
        separate=[(0, 0.014), (20650, 0.0175), (25850, 0.0245), (36200, 0.035), (41350, 0.05525),
                  (77550, 0.0637), (258750, 0.0897), (517500, 0.1075)],
        hoh=[(0, 0.014), (20650, 0.0175), (51700, 0.0245), (72400, 0.035), (82700, 0.05525),
             (155100, 0.0637), (517500, 0.0897), (1035000, 0.1075)],
    ),
    personal_exemption=_exemption(1000, 1000, 1550),
)

NEW_YORK = _state(
    "NY", "New York", StateTaxType.PROGRESSIVE,
    brackets=_by_status(
        single=[(0, 0.04), (8800, 0.045), (12100, 0.0525), (14350, 0.055), (83350, 0.06), (222700, 0.0685),
                (1115550, 0.0965), (5000000, 0.103), (25000000, 0.109)],
        joint=[(0, 0.04), (17700, 0.045), (24400, 0.0525), (28900, 0.055), (167050, 0.06), (334050, 0.0685),
               (2231100, 0.0965), (5000000, 0.103), (25000000, 0.109)],
        separate=[(0, 0.04), (8800, 0.045), (12100, 0.0525), (14350, 0.055), (83350, 0.06), (167025, 0.0685),
                  (1115550, 0.0965), (5000000, 0.103), (25000000, 0.109)],
        hoh=[(0, 0.04), (12900, 0.045), (16200, 0.0525), (18550, 0.055), (125200, 0.06), (223150, 0.0685),
             (1115550, 0.0965), (5000000, 0.103), (25000000, 0.109)],
    ),
    standard_deduction=_deduction(8300, 16650, 8300, 11600),
    personal_exemption=_exemption(0, 0, 1000),
)

NORTH_DAKOTA = _state(
    "ND", "North Dakota", StateTaxType.PROGRESSIVE,
    brackets=_by_status(
        single=[(0, 0.0105), (45350, 0.0204), (109600, 0.0227), (212000, 0.0264)],
        joint=[(0, 0.0105), (75900, 0.0204), (183050, 0.0227), (281550, 0.0264)],
        separate=[(0, 0.0105), (37950, 0.0204), (91525, 0.0227), (140775, 0.0264)],
        hoh=[(0, 0.0105), (60600, 0.0204), (146400, 0.0227), (246750, 0.0264)],
    ),
    standard_deduction=_deduction(14600, 29200, 14600, 21900),
)

OHIO = _state(
    "OH", "Ohio", StateTaxType.PROGRESSIVE,
    brackets=_all_statuses([(0, 0.0), (26050, 0.02765), (46100, 0.03226), (92200, 0.03688), (115250, 0.04413)]),
)

OKLAHOMA = _state(
    "OK", "Oklahoma", StateTaxType.PROGRESSIVE,
    brackets=_by_status(
        single=[(0, 0.0025), (1000, 0.0075), (2500, 0.0175), (3750, 0.0275), (4900, 0.0375), (7200, 0.05)],
        joint=[(0, 0.0025), (2000, 0.0075), (5000, 0.0175), (7500, 0.0275), (9800, 0.0375), (14400, 0.05)],
        separate=[(0, 0.0025), (1000, 0.0075), (2500, 0.0175), (3750, 0.0275), (4900, 0.0375), (7200, 0.05)],
        hoh=[(0, 0.0025), (1500, 0.0075), (3750, 0.0175), (5625, 0.0275), (7350, 0.0375), (10800, 0.05)],
    ),
    standard_deduction=_deduction(7150, 14300, 7150, 10725),
    personal_exemption=_exemption(1000, 1000, 1000),
)

OREGON = _state(
    "OR", "Oregon", StateTaxType.PROGRESSIVE,
    brackets=_by_status(
        single=[(0, 0.0475), (4050, 0.0675), (10200, 0.0875), (25500, 0.099), (63900, 0.1125)],
        joint=[(0, 0.0475), (8100, 0.0675), (20400, 0.0875), (51000, 0.099), (127800, 0.1125)],
        separate=[(0, 0.0475), (4050, 0.0675), (10200, 0.0875), (25500, 0.099), (63900, 0.1125)],
        hoh=[(0, 0.0475), (6500, 0.0675), (16300, 0.0875), (40800, 0.099), (102200, 0.1125)],
    ),
    standard_deduction=_deduction(2745, 5490, 2745, 4120),
)

RHODE_ISLAND = _state(
    "RI", "Rhode Island", StateTaxType.PROGRESSIVE,
    brackets=_all_statuses([(0, 0.0375), (73450, 0.0475), (167700, 0.0599)]),
    standard_deduction=_deduction(9900, 19800, 9900, 14850),
    personal_exemption=_exemption(4750, 4750, 4750),
)

SOUTH_CAROLINA = _state(
    "SC", "South Carolina", StateTaxType.PROGRESSIVE,
    brackets=_by_status(
        single=[(0, 0.0), (3460, 0.03), (6920, 0.04), (10380, 0.05), (13840, 0.06), (17300, 0.07)],
        joint=[(0, 0.0), (6920, 0.03), (13840, 0.04), (20760, 0.05), (27680, 0.06), (34600, 0.07)],
        separate=[(0, 0.0), (3460, 0.03), (6920, 0.04), (10380, 0.05), (13840, 0.06), (17300, 0.07)],
        hoh=[(0, 0.0), (5200, 0.03), (10380, 0.04), (15570, 0.05), (20760, 0.06), (25950, 0.07)],
    ),
    standard_deduction=_deduction(12950, 25900, 12950, 19425),
)

VERMONT = _state(
    "VT", "Vermont", StateTaxType.PROGRESSIVE,
    brackets=_by_status(
        single=[(0, 0.0335), (42050, 0.066), (101900, 0.076), (213150, 0.0875)],
        joint=[(0, 0.0335), (70450, 0.066), (170200, 0.076), (260300, 0.0875)],
        separate=[(0, 0.0335), (35225, 0.066), (85100, 0.076), (130150, 0.0875)],
        hoh=[(0, 0.0335), (56250, 0.066), (136050, 0.076), (236750, 0.0875)],
    ),
    standard_deduction=_deduction(7250, 14500, 7250, 10875),
    personal_exemption=_exemption(4700, 4700, 4700),
)

VIRGINIA = _state(
    "VA", "Virginia", StateTaxType.PROGRESSIVE,
    brackets=_all_statuses([(0, 0.02), (3000, 0.03), (5000, 0.05), (17000, 0.0575)]),
    standard_deduction=_deduction(4500, 9000, 4500, 6750),
    personal_exemption=_exemption(930, 930, 930),
)

WEST_VIRGINIA = _state(
    "WV", "West Virginia", StateTaxType.PROGRESSIVE,
    brackets=_all_statuses([(0, 0.03), (10000, 0.04), (25000, 0.045), (40000, 0.06), (60000, 0.065)]),
    standard_deduction=_deduction(2000, 4000, 2000, 3000),
    personal_exemption=_exemption(2300, 2300, 2300),
)

WISCONSIN = _state(
    "WI", "Wisconsin", StateTaxType.PROGRESSIVE,
    brackets=_by_status(
        single=[(0, 0.0354), (13810, 0.0465), (27630, 0.0627), (304170, 0.0765)],
        joint=[(0, 0.0354), (18420, 0.0465), (36840, 0.0627), (405560, 0.0765)],
        separate=[(0, 0.0354), (9210, 0.0465), (18420, 0.0627), (202780, 0.0765)],
        hoh=[(0, 0.0354), (16110, 0.0465), (32240, 0.0627), (354860, 0.0765)],
    ),
    standard_deduction=_deduction(14180, 26270, 13135, 20870),
)
