"""
View models shared by the API and the Streamlit UI.
"""

import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, TypeVar, Union
from urllib.parse import urlencode

from .catalog import MovieCatalog
from .images import backdrop_url, poster_url
from .models import GenreTile, Movie
from .slugs import genre_to_slug

MAX_PERMUTATIONS = 10
MOVIES_PATH = '/movies?'  # listing route of the web site

T = TypeVar('T')


@dataclass
class PermutationLink:
	label: str
	href: str


def genre_tiles(catalog: MovieCatalog) -> List[GenreTile]:
	"""One tile per genre, in all_genres() order, with its representative image."""
	return [
		GenreTile(
			name=genre,
			slug=genre_to_slug(genre),
			count=len(catalog.by_genre(genre)),
			image=catalog.genre_image(genre),
		)
		for genre in catalog.all_genres()
	]


def movies_href(
	genres: Sequence[str] = (),
	actors: Sequence[str] = (),
	directors: Sequence[str] = (),
	prefix: str = MOVIES_PATH,
) -> str:
	params = [('genre', genre_to_slug(g)) for g in genres]
	params += [('actor', a) for a in actors]
	params += [('director', d) for d in directors]
	return f"{prefix}{urlencode(params)}"


def permutation_links(
	genres: Sequence[str],
	actors: Sequence[str],
	directors: Sequence[str],
	prefix: str = MOVIES_PATH,
) -> List[PermutationLink]:
	"""
	Up to ten "Best ..." shortcuts built from the most popular genres, actors and directors:
	top 3 genres, 2 adjacent genre pairs, top 2 actors, genre + actor,
	top director, genre + director. `prefix` is prepended to each query string
	(the Streamlit UI selects its Movies page with '?page=Movies&').
	"""
	links: List[PermutationLink] = []

	for genre in genres[:3]:
		links.append(PermutationLink(f"Best {genre} Movies", movies_href(genres=[genre], prefix=prefix)))

	for first, second in list(zip(genres, genres[1:]))[:2]:
		links.append(PermutationLink(f"Best {first} & {second} Movies", movies_href(genres=[first, second], prefix=prefix)))

	for actor in actors[:2]:
		links.append(PermutationLink(f"Best Movies featuring {actor}", movies_href(actors=[actor], prefix=prefix)))

	if genres and actors:
		links.append(PermutationLink(
			f"Best {genres[0]} Movies featuring {actors[0]}",
			movies_href(genres=[genres[0]], actors=[actors[0]], prefix=prefix),
		))

	if directors:
		links.append(PermutationLink(f"Best Movies by {directors[0]}", movies_href(directors=[directors[0]], prefix=prefix)))

	if genres and directors:
		links.append(PermutationLink(
			f"Best {genres[0]} Movies by {directors[0]}",
			movies_href(genres=[genres[0]], directors=[directors[0]], prefix=prefix),
		))

	return links[:MAX_PERMUTATIONS]


def format_runtime(minutes: Optional[int]) -> str:
	if not minutes:
		return 'N/A'
	hours, mins = divmod(minutes, 60)
	if not hours:
		return f'{mins}m'
	return f'{hours}h {mins}m'


def format_money(amount: Optional[int]) -> str:
	if not amount:
		return 'N/A'
	return f'${amount:,}'


def catalog_stats(catalog: MovieCatalog) -> Dict[str, object]:
	return {
		'total': len(catalog),
		'genres': len(catalog.all_genres()),
		'years': catalog.year_range(),
	}


def run_with_minimum_duration(
	fn: Callable[[], T],
	minimum_seconds: float,
	clock: Callable[[], float] = time.monotonic,
	sleep: Callable[[float], None] = time.sleep,
) -> T:
	"""Call fn and keep going until at least minimum_seconds have passed (loader flicker)."""
	start = clock()
	result = fn()
	remaining = minimum_seconds - (clock() - start)
	if remaining > 0:
		sleep(remaining)
	return result


def movie_card(movie: Union[Movie, Dict[str, Any]]) -> Dict[str, object]:
	"""
	Fields the detail panel shows, already formatted. Accepts a Movie or
	its serialized form (the API payload shape).
	"""
	data = movie.to_dict() if isinstance(movie, Movie) else movie
	return {
		'title': data.get('title', ''),
		'year': data.get('year'),
		'tagline': data.get('tagline') or '',
		'overview': data.get('overview') or '',
		'rating': f"{data.get('voteAverage') or 0:.1f}",
		'votes': f"{data.get('voteCount') or 0:,}",
		'runtime': format_runtime(data.get('runtime')),
		'budget': format_money(data.get('budget')),
		'revenue': format_money(data.get('revenue')),
		'genres': ', '.join(data.get('genres') or []),
		'director': data.get('director') or 'Unknown',
		'cast': ', '.join(c['name'] for c in (data.get('cast') or [])[:5]),
		'poster': poster_url(data.get('posterPath')),
		'backdrop': backdrop_url(data.get('backdropPath')),
		'source': data.get('source', 'local'),
	}
