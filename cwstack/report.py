from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TextIO

from cwstack.check import CheckResult, Severity


@dataclass(frozen=True)
class RulesFileResult:
    """One row of the `cwstack check` table.

    Exactly one of ``error`` (the file was skipped or did not yield rules) and
    ``check`` (lint outcome of the loaded rule set) is set.
    """

    file_path: str
    success: bool
    error: str | None
    check: CheckResult | None


def _display_path(path: str, width: int = 26) -> str:
    # Keep the tail of long paths: the file name is what tells rule sets apart.
    try:
        shown = os.path.relpath(path)
    except ValueError:
        shown = path
    return shown if len(shown) <= width else "…" + shown[1 - width :]


def print_check_table(results: list[RulesFileResult], out: TextIO) -> None:
    """Print a summary table of checked rule files.

    Columns: File | WF | Rules | Errors | Warnings
    """
    out.write("\n")
    out.write("  File                       │ WF  │ Rules │ Errs │ Warns\n")
    out.write("  ─────────────────────────────┼─────┼───────┼──────┼──────\n")

    total_success = 0
    total_wf = 0
    total_rules = 0
    total_errors = 0
    total_warnings = 0

    for r in results:
        label = _display_path(r.file_path)
        match r.check:
            case None:
                out.write(f"  {label:<27}  │ ✗   │   —   │   —  │   —\n")
            case check:
                total_success += 1
                wf = "✓" if check.is_well_formed else "✗"
                if check.is_well_formed:
                    total_wf += 1
                total_rules += check.rule_count
                total_errors += len(check.errors)
                total_warnings += len(check.warnings)
                out.write(
                    f"  {label:<27}  │ {wf}   │ {check.rule_count:>4}  "
                    f"│  {len(check.errors):>2}  │  {len(check.warnings):>2}\n"
                )

    out.write("  ─────────────────────────────┼─────┼───────┼──────┼──────\n")
    n = len(results)
    out.write(
        f"  TOTALS ({total_success}/{n} loaded, {total_wf}/{total_success or 1} WF)  "
        f"│     │ {total_rules:>4}  │  {total_errors:>2}  │  {total_warnings:>2}\n\n"
    )


def print_check_diagnostics(results: list[RulesFileResult], out: TextIO) -> None:
    """Print a per-file diagnostic breakdown (errors, warnings, load failures)."""
    out.write("  --- Diagnostics ---\n")
    for r in results:
        label = _display_path(r.file_path)
        if not r.success:
            out.write(f"\n  {label}\n")
            out.write(f"    ✗ {r.error}\n")
            continue

        match r.check:
            case None:
                continue
            case check:
                if not check.diagnostics:
                    continue
                out.write(f"\n  {label}\n")
                for diag in check.diagnostics:
                    where = f"rule {diag.rule_index}: " if diag.rule_index is not None else ""
                    if diag.severity == Severity.ERROR:
                        out.write(f"    ✗ [{diag.check}] {where}{diag.message}\n")
                    else:
                        out.write(f"    ⚠ [{diag.check}] {where}{diag.message}\n")
    out.write("\n")
