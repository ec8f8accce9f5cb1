#!/usr/bin/env python3
"""
Walk one development project through the accounting decision flow.

Evaluates the project under the chosen treatment, prints the journal
lines, the depreciation schedule, the statement comparison against the
sample baseline, and an ROI appraisal.

Usage:
    python3 scripts/demo_decision.py
    python3 scripts/demo_decision.py --cost 30000000 --treatment expense
    python3 scripts/demo_decision.py --criteria 2 --phase maintenance
    python3 scripts/demo_decision.py --log-level INFO   # JSON logs on stderr
"""

import argparse
import logging
import sys
from decimal import Decimal
from pathlib import Path

# ---------------------------------------------------------------------------
# Project root on sys.path
# ---------------------------------------------------------------------------
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
CRITERIA_FIELDS = (
    "future_economic_benefit",
    "technical_feasibility",
    "completion_intention",
    "adequate_resources",
)


def _yen(amount: Decimal) -> str:
    return f"{amount:>16,f}"


def main() -> int:
    parser = argparse.ArgumentParser(description="Accounting decision walkthrough")
    parser.add_argument("--name", default="顧客管理システム刷新", help="Project name")
    parser.add_argument("--cost", default="10000000", help="Development cost (yen)")
    parser.add_argument("--duration", type=int, default=12, help="Duration in months")
    parser.add_argument("--phase", default="development",
                        choices=["requirements", "development", "maintenance"])
    parser.add_argument("--treatment", default="capitalize", choices=["expense", "capitalize"])
    parser.add_argument("--criteria", type=int, default=4, choices=range(0, 5),
                        help="Number of capitalization criteria satisfied")
    parser.add_argument("--log-level", default=None,
                        help="Emit structured logs at this level (e.g. INFO)")
    args = parser.parse_args()

    from devcost_engines.explanation import format_yen
    from devcost_kernel.domain.project import (
        AccountingTreatment,
        DecisionCriteria,
        DevelopmentPhase,
        Project,
    )
    from devcost_kernel.exceptions import DevCostError
    from devcost_kernel.logging_config import configure_logging
    from devcost_modules.decision import AccountingDecisionService
    from devcost_modules.reporting import load_sample_statement

    if args.log_level:
        configure_logging(level=getattr(logging, args.log_level.upper()))
    else:
        logging.disable(logging.CRITICAL)

    project = Project(
        id="demo-001",
        name=args.name,
        description="デモ用プロジェクト",
        cost=Decimal(args.cost),
        duration=args.duration,
        phase=DevelopmentPhase(args.phase),
        team_size=5,
    )
    criteria = DecisionCriteria(**{
        name: index < args.criteria for index, name in enumerate(CRITERIA_FIELDS)
    })
    treatment = AccountingTreatment(args.treatment)
    service = AccountingDecisionService()

    # -----------------------------------------------------------------
    # 1. Decision
    # -----------------------------------------------------------------
    print()
    print(f"  [1/4] Evaluating {project.name} ({format_yen(project.cost)}円, {treatment.value})")
    try:
        outcome = service.evaluate(project, criteria, treatment)
    except DevCostError as exc:
        print(f"  ERROR [{exc.code}]: {exc}", file=sys.stderr)
        return 1

    rec = outcome.recommendation
    print(f"         {rec.title}  {rec.detail}")
    print(f"         {rec.message}")
    for warning in outcome.validation.warnings:
        print(f"         ! {warning.message}: {warning.suggestion}")
    print()
    for paragraph in outcome.journal.explanation.split("\n\n"):
        print(f"         {paragraph}")

    # -----------------------------------------------------------------
    # 2. Journal
    # -----------------------------------------------------------------
    print()
    print("  [2/4] Journal entries")
    print(f"         {'account':<24}{'debit':>16}{'credit':>16}")
    for line in outcome.journal.all_lines:
        print(f"         {line.account:<20}{_yen(line.debit)}{_yen(line.credit)}")

    if outcome.journal.depreciation_schedule:
        print()
        print("         Depreciation schedule")
        for entry in outcome.journal.depreciation_schedule:
            print(
                f"         Y{entry.year}  {_yen(entry.beginning_value)}"
                f"{_yen(entry.depreciation_amount)}{_yen(entry.ending_value)}"
            )

    # -----------------------------------------------------------------
    # 3. Statement comparison
    # -----------------------------------------------------------------
    print()
    print("  [3/4] Statement comparison against the sample company")
    comparison = service.compare_scenarios(load_sample_statement(), project)
    for difference in comparison.differences:
        scenario = comparison.scenario(difference.scenario_id)
        print(
            f"         {scenario.name:<12} net profit {_yen(difference.profit_loss_impact)}"
            f"  cash {_yen(difference.cash_flow_impact)}"
            f"  equity ratio {scenario.ratios.equity_ratio:.2f}%"
        )

    # -----------------------------------------------------------------
    # 4. ROI
    # -----------------------------------------------------------------
    print()
    print("  [4/4] ROI (benefit of 30% of cost per year, 5 years)")
    roi = service.calculate_roi(
        investment=project.cost,
        annual_revenue=project.cost * Decimal("0.2"),
        annual_cost_savings=project.cost * Decimal("0.1"),
    )
    converged = "" if roi.irr_converged else " (approximate)"
    print(f"         ROI {roi.roi:.1f}%  NPV {format_yen(roi.npv.quantize(Decimal('1')))}円"
          f"  IRR {roi.irr:.0f}%{converged}  payback {roi.payback_period:.2f} years")

    print()
    print("  Done.")
    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
