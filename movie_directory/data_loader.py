"""
Data loading module.
Reads the bundled movie catalog (a JSON array, or JSON Lines) into immutable Movie records.
"""

# Standard libs for JSON parsing, typing, and paths
import json  # read JSON documents
from typing import Any, Dict, Iterable, List, Optional, Tuple  # type hints
from pathlib import Path  # filesystem-safe paths

# Import our data classes used across the project
from .models import CastMember, Movie, MovieSource  # structured movie record

# Console logging
from loguru import logger  # console logger


class DataLoader:
	"""
	Handles loading and light validation of movie data.
	Field names follow the camelCase shape of the bundled document (voteAverage, posterPath, ...).
	"""

	def load_movies(self, filepath: str) -> List[Movie]:
		"""
		Load movies from a file, choosing the parser by extension.
		'.jsonl' files are read line by line; anything else must hold a JSON array.
		"""
		path = Path(filepath)  # normalize path
		if path.suffix == '.jsonl':
			return self.load_movies_from_jsonl(str(path))
		return self.load_movies_from_json(str(path))

	def load_movies_from_json(self, filepath: str) -> List[Movie]:
		"""
		Load movies from a JSON document holding an array of movie objects.
		Records that cannot be parsed are skipped with a warning.
		"""
		filepath = Path(filepath)  # normalize path

		# Validate the file presence early to give clear error messages
		if not filepath.exists():
			raise FileNotFoundError(f"Movie data file not found: {filepath}")

		logger.info(f"[DataLoader] Loading movies from {filepath}...")  # log action

		with open(filepath, 'r', encoding='utf-8') as f:
			data = json.load(f)  # whole document at once, the catalog is small

		if not isinstance(data, list):
			raise ValueError(f"Expected a JSON array of movies in {filepath}, got {type(data).__name__}")

		movies = self._parse_records(enumerate(data, 1))  # convert dicts -> Movie
		logger.info(f"[DataLoader] Successfully loaded {len(movies)} movies.")  # summary
		return movies

	def load_movies_from_jsonl(self, filepath: str) -> List[Movie]:
		"""
		Load movies from a JSON Lines (JSONL) file where each line is one JSON object.
		Returns a list of Movie objects.
		"""
		filepath = Path(filepath)  # normalize path

		if not filepath.exists():
			raise FileNotFoundError(f"Movie data file not found: {filepath}")

		logger.info(f"[DataLoader] Loading movies from {filepath}...")  # log action

		records = []  # (line number, raw dict) pairs
		with open(filepath, 'r', encoding='utf-8') as f:
			for line_num, line in enumerate(f, 1):  # keep track of line number for diagnostics
				if not line.strip():  # tolerate blank lines
					continue
				try:
					records.append((line_num, json.loads(line.strip())))  # parse JSON object per line
				except json.JSONDecodeError as e:
					logger.warning(f"[DataLoader] Skipping invalid JSON at line {line_num}: {e}")  # malformed line

		movies = self._parse_records(records)
		logger.info(f"[DataLoader] Successfully loaded {len(movies)} movies.")  # summary
		return movies

	def _parse_records(self, records: Iterable[Tuple[int, Any]]) -> List[Movie]:
		"""Parse raw records, skipping the ones that fail and repeated ids."""
		movies: List[Movie] = []  # accumulator for parsed Movie objects
		seen_ids = set()  # ids must be unique within the local dataset
		for position, data in records:
			try:
				movie = self._parse_movie_data(data)  # convert dict -> Movie
			except (TypeError, ValueError, KeyError) as e:
				logger.warning(f"[DataLoader] Error parsing movie at record {position}: {e}")  # bad record
				continue  # move on
			if movie.id in seen_ids:
				logger.warning(f"[DataLoader] Skipping duplicate id {movie.id} at record {position}")
				continue
			seen_ids.add(movie.id)
			movies.append(movie)  # collect
		return movies

	def _parse_movie_data(self, data: Dict) -> Movie:
		"""
		Convert a raw dictionary (from file) into a strongly-typed Movie object.
		Keeps display text as written and applies safe numeric defaults.
		"""
		if not isinstance(data, dict):
			raise TypeError(f"movie record must be an object, got {type(data).__name__}")
		if data.get('id') is None or not data.get('title'):
			raise ValueError("movie record needs an 'id' and a 'title'")

		year = self._optional_int(data.get('year'))  # None when unknown
		decade = self._optional_int(data.get('decade'))
		if year is not None:
			derived = (year // 10) * 10  # the year always wins
			if decade is not None and decade != derived:
				logger.warning(
					f"[DataLoader] Movie {data.get('id')}: decade {decade} contradicts year {year}, using {derived}"
				)
			decade = derived

		vote_average = self._float(data.get('voteAverage'))
		if not 0.0 <= vote_average <= 10.0:  # out-of-range ratings count as unknown
			vote_average = 0.0

		# Assemble the Movie object; lists become tuples so records stay immutable
		return Movie(
			id=int(data['id']),
			title=str(data['title']),
			tagline=data.get('tagline') or '',
			overview=data.get('overview') or '',
			release_date=str(data.get('releaseDate') or ''),
			year=year,
			decade=decade,
			vote_average=vote_average,
			vote_count=max(0, self._int(data.get('voteCount'))),
			popularity=self._float(data.get('popularity')),
			runtime=self._int(data.get('runtime')),
			budget=self._int(data.get('budget')),
			revenue=self._int(data.get('revenue')),
			original_language=data.get('originalLanguage') or '',
			status=data.get('status') or '',
			genres=self._parse_string_list(data.get('genres')),
			keywords=self._parse_string_list(data.get('keywords')),
			production_companies=self._parse_string_list(data.get('productionCompanies')),
			poster_path=data.get('posterPath') or None,
			backdrop_path=data.get('backdropPath') or None,
			cast=self._parse_cast(data.get('cast')),
			director=(data.get('director') or '').strip() or None,
			source=MovieSource.LOCAL,
		)

	def _parse_string_list(self, value) -> Tuple[str, ...]:
		"""
		Normalize a value that may be None, a list, or a comma-separated string
		into a tuple of strings. Order is preserved; casing is left alone.
		"""
		if value is None:  # missing field
			return ()
		if isinstance(value, list):  # already a list
			return tuple(str(item) for item in value if item)
		if isinstance(value, str):  # comma-separated string
			return tuple(item.strip() for item in value.split(',') if item.strip())
		return ()  # any other type becomes empty

	def _parse_cast(self, value) -> Tuple[CastMember, ...]:
		if not isinstance(value, list):
			return ()
		cast = []
		for entry in value:
			if isinstance(entry, dict) and entry.get('name'):
				cast.append(CastMember(
					name=str(entry['name']),
					character=entry.get('character') or '',
					profile_path=entry.get('profilePath') or None,
				))
			elif isinstance(entry, str) and entry.strip():  # bare names
				cast.append(CastMember(name=entry.strip()))
		return tuple(cast)

	def _optional_int(self, value) -> Optional[int]:
		if value is None or value == '':
			return None
		return int(value)

	def _int(self, value) -> int:
		return int(value) if value else 0

	def _float(self, value) -> float:
		return float(value) if value else 0.0
