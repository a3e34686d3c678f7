#!/usr/bin/env python3
"""
Merchant Description Normalizer

Cleans raw bank transaction text into a counterparty name. The rules are
ordered string transforms; the card-purchase extraction must run before the
merchant prefix check because it produces the text that check looks at.
"""

import re

LEADING_DATE = re.compile(r"^\d{2}\.\d{2}\s")
TRAILING_PAY_DATE = re.compile(r"Betalt:\s\d{2}\.\d{2}\.\d{2}$")
DIRECTION_LABELS = ("Til: ", "Fra: ")

# e.g. "*6227 26.02 NOK 30.00 COCA-COLA ENTERPRISES NOR Kurs: 1.0000"
CARD_PURCHASE = re.compile(
    r"^\*\d{4}\s\d{2}\.\d{2}\s\w{3}\s\d+\.\d{2}\s(.+?)\sKurs:\s\d+\.\d+$",
    re.IGNORECASE,
)

# (lowercase prefix, canonical name)
KNOWN_MERCHANTS = [
    ("skimore", "Skimore"),
    ("starbucks", "Starbucks"),
    ("steam", "Steam"),
    ("domeneshop", "Domeneshop"),
    ("hokksund sushi og thai", "Hokksund Sushi og Thai"),
    ("tekna", "TEKNA"),
]


def _strip_repeated_prefix(text: str, prefix: str) -> str:
    while text.startswith(prefix):
        text = text[len(prefix):]
    return text


def _normalize_once(text: str) -> str:
    text = LEADING_DATE.sub("", text, count=1)
    text = TRAILING_PAY_DATE.sub("", text, count=1)

    for label in DIRECTION_LABELS:
        text = _strip_repeated_prefix(text, label)

    match = CARD_PURCHASE.match(text)
    if match:
        text = match.group(1)

    lowered = text.lower()
    for prefix, canonical in KNOWN_MERCHANTS:
        if lowered.startswith(prefix):
            text = canonical
            break

    return text.strip()


def normalize_description(text: str) -> str:
    """
    Turn raw transaction text into a clean counterparty name.

    Applies, in order: strip a leading "DD.MM " date, strip a trailing
    "Betalt: DD.MM.YY", strip "Til: "/"Fra: " labels, extract the merchant
    from card-purchase text, map known merchant prefixes to their canonical
    name, trim whitespace. The rules are re-applied until the text is
    stable, so normalizing an already normalized text is a no-op.

    Examples:
        normalize_description("12.02 KIWI OSLO Betalt: 01.03.21") -> "KIWI OSLO"
        normalize_description("*6227 26.02 NOK 59.00 STARBUCKS OSLO S Kurs: 1.0000") -> "Starbucks"
    """
    # No rule lengthens the text, so this reaches a fixed point
    current = text
    cleaned = _normalize_once(current)
    while cleaned != current:
        current = cleaned
        cleaned = _normalize_once(current)
    return current
