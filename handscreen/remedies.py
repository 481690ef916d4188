"""
Fixed suggestion lists and display bands keyed by score.
"""
from dataclasses import dataclass
from typing import List, Tuple


@dataclass(frozen=True)
class RiskBand:
    """Display label and BGR colour for a score band."""
    label: str
    color: Tuple[int, int, int]


_VERY_LOW = [
    'Maintain your positive mental health with regular social activities',
    'Continue your healthy lifestyle habits including exercise and good sleep',
    'Practice mindfulness and gratitude exercises',
    'Stay connected with friends and family'
]

_LOW = [
    'Consider incorporating light exercise into your daily routine (20-30 minutes)',
    'Practice stress management techniques like deep breathing or meditation',
    'Ensure 7-8 hours of quality sleep each night',
    'Engage in hobbies and activities you enjoy',
    'Connect with supportive friends or family members'
]

_MODERATE = [
    'Recommended: Speak with a mental health professional for guidance',
    'Establish a consistent daily routine to provide structure',
    'Engage in regular physical activity (walking, yoga, or other exercises)',
    'Practice cognitive behavioral techniques to challenge negative thoughts',
    'Limit caffeine and alcohol consumption',
    'Join a support group or community activities',
    'Consider journaling to express your feelings'
]

_HIGH = [
    'Strongly recommended: Consult with a licensed therapist or counselor',
    'Contact a mental health helpline for immediate support',
    'Avoid isolation - reach out to trusted friends or family',
    'Create a safety plan with emergency contacts',
    'Focus on basic self-care: hygiene, nutrition, and sleep',
    'Avoid major life decisions during this period',
    'Consider medication evaluation with a psychiatrist',
    'Engage in gentle activities that bring comfort'
]

_CRISIS = [
    'URGENT: Please contact a mental health crisis helpline immediately',
    'National Suicide Prevention Lifeline: 988 (US) or local emergency services',
    'Reach out to a trusted person right away',
    'Visit your nearest emergency room if you have thoughts of self-harm',
    'Do not stay alone - ensure you have someone with you',
    'Schedule an immediate appointment with a mental health professional',
    'Remove any means of self-harm from your environment',
    'Remember: This is temporary, and help is available'
]

# (exclusive upper bound, suggestions, band); the last band takes everything else
_BANDS = [
    (20, _VERY_LOW, RiskBand('Very Low Risk', (0, 160, 0))),
    (40, _LOW, RiskBand('Low Risk', (200, 120, 0))),
    (60, _MODERATE, RiskBand('Moderate Risk', (0, 200, 230))),
    (80, _HIGH, RiskBand('High Risk', (0, 140, 255))),
]
_TOP = (_CRISIS, RiskBand('Critical - Seek Help', (0, 0, 220)))


def _lookup(score: int):
    for upper, suggestions, band in _BANDS:
        if score < upper:
            return suggestions, band
    return _TOP


def get_remedy_suggestions(score: int) -> List[str]:
    """
    Suggestions for a score, increasingly urgent from [0,20) up to [80,100].

    Returns a fresh list each call.
    """
    suggestions, _ = _lookup(score)
    return list(suggestions)


def risk_band(score: int) -> RiskBand:
    """Label and colour shown next to a score."""
    _, band = _lookup(score)
    return band
