"""
Genre <-> URL slug normalization.

slug_to_genre is a lossy inverse of genre_to_slug (punctuation and casing are gone),
so pages resolve slugs with find_genre_by_slug against the genres that actually exist.
"""

import re
from typing import Iterable, Optional

from rapidfuzz import fuzz, process

_WHITESPACE = re.compile(r'\s+')
_NON_SLUG = re.compile(r'[^a-z0-9-]')


def genre_to_slug(genre: str) -> str:
	"""'Science Fiction' -> 'science-fiction'."""
	return _NON_SLUG.sub('', _WHITESPACE.sub('-', genre.lower()))


def slug_to_genre(slug: str) -> str:
	"""'science-fiction' -> 'Science Fiction'. Only a display fallback."""
	return ' '.join(word[:1].upper() + word[1:] for word in slug.split('-'))


def find_genre_by_slug(slug: Optional[str], genres: Iterable[str]) -> Optional[str]:
	"""
	Recover the authoritative genre name for a slug, or None.
	Tries, in order: exact slug match, lowercase-with-hyphens match,
	and a match with hyphens/spaces removed ('sciencefiction' -> 'Science Fiction').
	"""
	if not slug or not isinstance(slug, str) or not slug.strip():
		return None

	candidates = list(genres)
	normalized = genre_to_slug(slug.strip())

	for genre in candidates:
		if genre_to_slug(genre) == normalized:
			return genre

	for genre in candidates:
		if _WHITESPACE.sub('-', genre.lower()) == normalized:
			return genre

	compact = normalized.replace('-', '')
	for genre in candidates:
		if _WHITESPACE.sub('', genre.lower()) == compact:
			return genre

	return None


def suggest_genre(slug: Optional[str], genres: Iterable[str], cutoff: float = 80) -> Optional[str]:
	"""Closest known genre for a slug that did not resolve (typo hints), or None."""
	if not slug or not slug.strip():
		return None
	choices = list(genres)
	if not choices:
		return None
	query = slug.strip().replace('-', ' ').lower()
	match = process.extractOne(query, choices, scorer=fuzz.WRatio, processor=str.lower, score_cutoff=cutoff)
	return match[0] if match else None
