"""
Ranking module.
Deterministic orderings used by the catalog and the listing pages:
top-rated order, the genre image rotation, popularity counts and the user-selectable sorts.
"""

from collections import Counter
from enum import Enum
from typing import Iterable, List, Sequence, Tuple

from .models import Movie


class SortOption(str, Enum):
	RATING_DESC = 'rating-desc'
	RATING_ASC = 'rating-asc'
	POPULARITY_DESC = 'popularity-desc'
	POPULARITY_ASC = 'popularity-asc'
	YEAR_DESC = 'year-desc'
	YEAR_ASC = 'year-asc'
	TITLE_ASC = 'title-asc'
	TITLE_DESC = 'title-desc'
	VOTE_COUNT_DESC = 'vote-count-desc'
	VOTE_COUNT_ASC = 'vote-count-asc'


SORT_LABELS = {
	SortOption.RATING_DESC: 'Highest Rated',
	SortOption.RATING_ASC: 'Lowest Rated',
	SortOption.POPULARITY_DESC: 'Most Popular',
	SortOption.POPULARITY_ASC: 'Least Popular',
	SortOption.YEAR_DESC: 'Newest First',
	SortOption.YEAR_ASC: 'Oldest First',
	SortOption.TITLE_ASC: 'Title (A-Z)',
	SortOption.TITLE_DESC: 'Title (Z-A)',
	SortOption.VOTE_COUNT_DESC: 'Most Votes',
	SortOption.VOTE_COUNT_ASC: 'Least Votes',
}


def top_rated_key(movie: Movie) -> Tuple[float, int, int]:
	"""Rating desc, then vote count desc, then id asc."""
	return (-movie.vote_average, -movie.vote_count, movie.id)


def genre_image_key(movie: Movie) -> Tuple[float, float, int]:
	"""Rating desc, then popularity desc, then id asc."""
	return (-movie.vote_average, -movie.popularity, movie.id)


def string_hash(text: str) -> int:
	"""
	32-bit polynomial string hash (h = h * 31 + code), wrapped like a signed
	32-bit integer, absolute value. Must not change: tile images depend on it.
	"""
	h = 0
	for ch in text:
		h = ((h << 5) - h + ord(ch)) & 0xFFFFFFFF
	if h >= 0x80000000:  # reinterpret as signed
		h -= 0x100000000
	return abs(h)


def rotate(items: Sequence, offset: int) -> List:
	"""items[offset:] + items[:offset]."""
	if not items:
		return []
	offset %= len(items)
	return list(items[offset:]) + list(items[:offset])


def most_common(names: Iterable[str], limit: int) -> List[str]:
	"""
	Count trimmed, non-empty names and return the top `limit`,
	ordered by count desc then name asc.
	"""
	counts = Counter(name.strip() for name in names if name and name.strip())
	ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
	return [name for name, _ in ranked[:max(0, limit)]]


def sort_movies(movies: Iterable[Movie], option: SortOption = SortOption.RATING_DESC) -> List[Movie]:
	"""Return a new list ordered by the given option. Stable, so ties keep input order."""
	option = SortOption(option)
	movies = list(movies)

	if option is SortOption.RATING_DESC:
		return sorted(movies, key=lambda m: m.vote_average, reverse=True)
	if option is SortOption.RATING_ASC:
		return sorted(movies, key=lambda m: m.vote_average)
	if option is SortOption.POPULARITY_DESC:
		return sorted(movies, key=lambda m: m.popularity, reverse=True)
	if option is SortOption.POPULARITY_ASC:
		return sorted(movies, key=lambda m: m.popularity)
	if option is SortOption.YEAR_DESC:
		return sorted(movies, key=lambda m: m.year or 0, reverse=True)  # unknown year sorts as 0
	if option is SortOption.YEAR_ASC:
		return sorted(movies, key=lambda m: m.year or 0)
	if option is SortOption.TITLE_ASC:
		return sorted(movies, key=lambda m: m.title.casefold())
	if option is SortOption.TITLE_DESC:
		return sorted(movies, key=lambda m: m.title.casefold(), reverse=True)
	if option is SortOption.VOTE_COUNT_DESC:
		return sorted(movies, key=lambda m: m.vote_count, reverse=True)
	return sorted(movies, key=lambda m: m.vote_count)
