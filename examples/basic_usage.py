#!/usr/bin/env python3
"""
Example: Basic usage of Complexity Gate as a Python library
"""

from complexity_gate import ComplexityGate, format_report, load_baseline, load_config

config = load_config(max_delta_pct=5)
gate = ComplexityGate(config)

# Analyze Python sources and gate them against the recorded baseline
entries = gate.collect(["/path/to/project/src"])
report = gate.run(entries, baseline=load_baseline(config.baseline_file))

print(format_report(report.results))
for regression in report.regressions:
    if regression.regressed:
        print(f"{regression.identity}: +{regression.delta_pct:.1f}% over baseline")

raise SystemExit(gate.exit_code(report))
