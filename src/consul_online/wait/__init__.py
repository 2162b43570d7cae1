# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Polling orchestration and outcome reporting."""

from .engine import PollingEngine, Prober
from .report import EXIT_CODES, Outcome, emit_outcome, report_outcome

__all__ = ["EXIT_CODES", "Outcome", "PollingEngine", "Prober", "emit_outcome", "report_outcome"]
