"""
analyzer.py — sequences the pure password functions with their side effects.

generate -> evaluate -> record in history -> optional clipboard copy.
A clipboard failure only turns `copied` off; the password and the
history entry are already settled by then.
"""
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from pwanalyzer.history import HistoryRecord, HistoryStore
from pwanalyzer.password_utils import (
    GeneratorConfig, ScoreResult, advisory_analysis, estimate_crack_time,
    estimate_entropy, evaluate, generate_password, strength_label
)

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisReport:
    password: str
    result: ScoreResult
    entropy: float

    @property
    def score(self) -> int:
        return self.result.score

    @property
    def label(self) -> str:
        return strength_label(self.result.score)

    @property
    def crack_time(self):
        return estimate_crack_time(self.result.score)

    def to_dict(self, include_advisory: bool = True) -> dict:
        data = self.result.to_dict()
        data.update({
            'label':              self.label,
            'crack_time':         self.crack_time.value,
            'crack_time_display': self.crack_time.display,
            'entropy':            round(self.entropy, 2),
        })
        if include_advisory:
            data['advisory'] = advisory_analysis(self.password)
        return data


@dataclass(frozen=True)
class GenerationReport:
    analysis: AnalysisReport
    copied: bool

    @property
    def password(self) -> str:
        return self.analysis.password


def analyze(password: str) -> AnalysisReport:
    return AnalysisReport(password=password, result=evaluate(password),
                          entropy=estimate_entropy(password))


def analyze_and_record(password: str, store: Optional[HistoryStore]) -> AnalysisReport:
    report = analyze(password)
    if store is not None:
        store.append(HistoryRecord(password=password, strength=report.score))
    return report


def generate_and_record(config: GeneratorConfig, store: Optional[HistoryStore],
                        copy: Optional[Callable[[str], None]] = None) -> GenerationReport:
    """Raises InvalidConfiguration before touching the history."""
    password = generate_password(config)
    report   = analyze_and_record(password, store)

    copied = False
    if copy is not None:
        try:
            copy(password)
            copied = True
        except Exception as e:
            log.error('Could not copy generated password: %s', e)
    return GenerationReport(analysis=report, copied=copied)
