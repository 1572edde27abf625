"""Marketplace Appeals - Complaint reason catalogue.

Chat and ticket complaints draw from their own lists; the public catalogue is
their union without duplicate codes, in first-seen order.
"""
from typing import Dict, List, Tuple

CHAT_REASONS: Tuple[Tuple[str, str], ...] = (
    ('offend', 'Оскорбление/Маты'),
    ('rude_language', 'Грубая лексика'),
    ('fraud', 'Мошенничество'),
    ('racism_nazism_xenophobia', 'Расизм/Нацизм/Ксенофобия'),
    ('other', 'Другое'),
)

TICKET_REASONS: Tuple[Tuple[str, str], ...] = (
    ('lateness', 'Опоздание/Отсутствие'),
    ('bad_quality', 'Плохое качество'),
    ('property_damage', 'Повреждения имущества'),
    ('overpricing', 'Завышение стоимости'),
    ('unprofessionalism', 'Непрофессионализм'),
    ('fraud', 'Мошенничество'),
    ('racism_nazism_xenophobia', 'Расизм/Нацизм/Ксенофобия'),
    ('other', 'Другое'),
)

OTHER = 'other'


def complaint_reasons() -> List[Dict]:
    """``[{'id', 'code', 'title'}]`` with ids numbered from 1."""
    seen = set()
    result = []
    for code, title in CHAT_REASONS + TICKET_REASONS:
        if code in seen:
            continue
        seen.add(code)
        result.append({'id': len(result) + 1, 'code': code, 'title': title})
    return result


def reason_codes() -> List[str]:
    return [reason['code'] for reason in complaint_reasons()]


def is_valid_reason(code) -> bool:
    return code in reason_codes()
