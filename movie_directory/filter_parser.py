"""
Filter parameter parsing module.
Turns the /movies query string (genre, actor, director, year, decade, minRating, minVoteCount)
into MovieFilterOptions, and builds the page title for a filter permutation.
"""

from typing import Iterable, List, Mapping, Optional, Sequence, Union

from loguru import logger  # console logging

from .catalog import MovieCatalog  # genre slug resolution
from .models import MovieFilterOptions  # structured filter

ParamValue = Union[str, Sequence[str], None]

# Query-string keys understood by parse_filter_params
FILTER_PARAMS = ('genre', 'actor', 'director', 'year', 'decade', 'minRating', 'minVoteCount')


def _as_list(value: ParamValue) -> List[str]:
	"""Single value or repeated parameter -> list of non-empty strings."""
	if value is None:
		return []
	if isinstance(value, str):
		value = [value]
	return [v for v in value if v is not None and str(v).strip()]


def _ints(values: Iterable[str]) -> List[int]:
	parsed = []
	for v in values:
		try:
			parsed.append(int(float(v)))  # '1999' and '1999.0' both accepted
		except (TypeError, ValueError):
			logger.debug(f"[Filters] Dropping non-numeric value '{v}'")
	return parsed


def _float(value: Optional[str]) -> Optional[float]:
	try:
		return float(value) if value is not None else None
	except ValueError:
		return None


def parse_filter_params(params: Mapping[str, ParamValue], catalog: MovieCatalog) -> MovieFilterOptions:
	"""Build MovieFilterOptions from request parameters. Unparseable values are ignored."""
	options = MovieFilterOptions()

	# Genres arrive as slugs (already percent-decoded); unknown ones pass through as given
	for raw in _as_list(params.get('genre')):
		value = raw.strip()
		options.genres.append(catalog.find_genre_by_slug(value) or value)

	options.actors = [a.strip() for a in _as_list(params.get('actor'))]
	options.directors = [d.strip() for d in _as_list(params.get('director'))]
	options.years = _ints(_as_list(params.get('year')))
	options.decades = _ints(_as_list(params.get('decade')))

	min_rating = _as_list(params.get('minRating'))
	if min_rating:
		options.min_rating = _float(min_rating[0])

	min_votes = _as_list(params.get('minVoteCount'))
	if min_votes:
		parsed = _ints(min_votes[:1])
		options.min_vote_count = parsed[0] if parsed else None

	logger.debug(f"[Filters] Parsed {dict(params)} -> {options}")
	return options


def join_names(names: Sequence[str]) -> str:
	"""['A'] -> 'A'; ['A', 'B'] -> 'A & B'; ['A', 'B', 'C'] -> 'A, B & C'."""
	if len(names) == 1:
		return names[0]
	return ', '.join(names[:-1]) + ' & ' + names[-1]


def build_page_title(options: MovieFilterOptions) -> str:
	"""
	Human title for a filter permutation, e.g.
	'Best Action & Thriller Movies' or 'Best Movies Featuring Tom Hanks'.
	"""
	parts: List[str] = []
	if options.genres:
		parts.append(join_names(options.genres))
	if options.actors:
		parts.append(f"featuring {join_names(options.actors)}")
	if options.directors:
		parts.append(f"by {join_names(options.directors)}")
	if options.years:
		parts.append(f"from {', '.join(str(y) for y in options.years)}")
	if options.decades:
		parts.append(f"from the {', '.join(f'{d}s' for d in options.decades)}")

	if not parts:
		return 'Best Movies'

	capitalized = ' '.join(part[:1].upper() + part[1:] for part in parts)
	if options.genres:
		return f'Best {capitalized} Movies'
	return f'Best Movies {capitalized}'
