"""
Data models for the Movie Directory.
Defines the core data structures shared by the catalog, the OMDb client and the API.
"""

# Import dataclass to define simple "record-like" classes without boilerplate
from dataclasses import dataclass, field  # auto-generates __init__, __repr__, etc.
from enum import Enum  # closed set of record origins
# Import typing helpers for precise and self-documenting types
from typing import Any, Dict, List, Optional, Tuple, Union  # collections and optional values


class MovieSource(str, Enum):
	"""Where a movie record came from. Ids are only unique within one source."""
	LOCAL = "local"  # bundled JSON dataset
	OMDB = "omdb"  # built on demand from the OMDb API


@dataclass(frozen=True)
class CastMember:
	name: str  # actor name as written in the source
	character: str = ''  # role played, may be empty
	profile_path: Optional[str] = None  # relative CDN path or None

	def to_dict(self) -> Dict[str, Any]:
		return {"name": self.name, "character": self.character, "profilePath": self.profile_path}


@dataclass(frozen=True)
class Movie:
	"""
	A single movie and all the information we know about it.
	Records are immutable once loaded; lists are stored as tuples.
	"""
	id: int  # identifier, unique only within its source
	title: str  # display title as written in the source
	overview: str = ''  # synopsis
	tagline: str = ''  # short marketing line
	release_date: str = ''  # free-form date string from the source
	year: Optional[int] = None  # release year if known
	decade: Optional[int] = None  # (year // 10) * 10 if year known
	vote_average: float = 0.0  # 0..10, 0 when unknown
	vote_count: int = 0  # number of votes
	popularity: float = 0.0  # source-defined popularity scale
	runtime: int = 0  # minutes, 0 when unknown
	budget: int = 0  # 0 when unknown
	revenue: int = 0  # 0 when unknown
	original_language: str = ''  # ISO code or language name
	status: str = ''  # e.g. "Released"
	genres: Tuple[str, ...] = ()  # source order, not normalized
	keywords: Tuple[str, ...] = ()  # unordered
	production_companies: Tuple[str, ...] = ()  # unordered
	poster_path: Optional[str] = None  # relative CDN path, absolute URL, or None
	backdrop_path: Optional[str] = None  # relative CDN path, absolute URL, or None
	cast: Tuple[CastMember, ...] = ()  # billing order
	director: Optional[str] = None  # single director if known
	source: MovieSource = MovieSource.LOCAL  # origin of the record
	provider_id: Optional[str] = None  # remote identifier (e.g. imdb "tt0133093")

	@property
	def key(self) -> Tuple[MovieSource, Union[int, str]]:
		"""Identity across sources: local ids and remote ids live in separate namespaces."""
		if self.source is MovieSource.LOCAL:
			return (self.source, self.id)
		return (self.source, self.provider_id or self.id)

	@property
	def cast_names(self) -> List[str]:
		return [member.name for member in self.cast]

	def to_dict(self) -> Dict[str, Any]:
		"""Serialize using the camelCase field names of the bundled dataset."""
		return {
			"id": self.id,
			"title": self.title,
			"tagline": self.tagline,
			"overview": self.overview,
			"releaseDate": self.release_date,
			"popularity": self.popularity,
			"voteAverage": self.vote_average,
			"voteCount": self.vote_count,
			"runtime": self.runtime,
			"budget": self.budget,
			"revenue": self.revenue,
			"originalLanguage": self.original_language,
			"status": self.status,
			"genres": list(self.genres),
			"keywords": list(self.keywords),
			"productionCompanies": list(self.production_companies),
			"posterPath": self.poster_path,
			"backdropPath": self.backdrop_path,
			"cast": [member.to_dict() for member in self.cast],
			"director": self.director,
			"year": self.year,
			"decade": self.decade,
			"source": self.source.value,
			"providerId": self.provider_id,
			"key": f"{self.key[0].value}:{self.key[1]}",  # e.g. "local:278", "omdb:tt0133093"
		}


@dataclass
class MovieFilterOptions:
	"""
	Criteria for the composite filter. Every field is optional;
	an empty list or None imposes no constraint.
	"""
	genres: List[str] = field(default_factory=list)  # AND: movie must have every genre
	actors: List[str] = field(default_factory=list)  # AND: movie must feature every actor (substring)
	directors: List[str] = field(default_factory=list)  # OR: directed by any of them (substring)
	years: List[int] = field(default_factory=list)  # release year membership
	decades: List[int] = field(default_factory=list)  # decade membership
	min_rating: Optional[float] = None  # vote_average >= min_rating
	min_vote_count: Optional[int] = None  # vote_count >= min_vote_count

	def is_empty(self) -> bool:
		return not (
			self.genres or self.actors or self.directors or self.years or self.decades
			or self.min_rating is not None or self.min_vote_count is not None
		)


@dataclass
class CombinedSearchResult:
	"""Local + remote search outcome, local results first."""
	query: str  # trimmed query text
	local_count: int  # matches in the bundled dataset
	omdb_count: int  # remote results before de-duplication
	total_count: int  # len(movies)
	movies: List[Movie]  # merged, de-duplicated by normalized title

	def to_dict(self) -> Dict[str, Any]:
		return {
			"query": self.query,
			"localCount": self.local_count,
			"omdbCount": self.omdb_count,
			"totalCount": self.total_count,
			"movies": [m.to_dict() for m in self.movies],
		}


@dataclass
class GenreTile:
	name: str  # genre as written in the dataset
	slug: str  # URL-safe token
	count: int  # number of local movies in the genre
	image: str  # representative poster/backdrop URL or placeholder


@dataclass
class GenrePage:
	"""Everything the genre page needs for one slug."""
	slug: str  # decoded slug as requested
	name: str  # resolved genre name (or best-effort capitalization)
	known: bool  # True if the genre exists in the local dataset
	movies: List[Movie]  # local movies, or remote ones when none are local
	from_remote: bool = False  # True if movies came from OMDb
	suggestion: Optional[str] = None  # "did you mean" hint when nothing was found
