"""
Unit tests for the OMDb client: payload mapping, throttling, caps and fail-soft behavior.
No network: every test runs against FakeOMDbSession.
"""

import zlib

import requests

from movie_directory.models import MovieSource
from movie_directory.omdb_client import (
	MAX_GENRE_RESULTS,
	OMDbClient,
	genre_matches,
	map_detail,
	parse_rating,
	parse_runtime,
	parse_vote_count,
	parse_year,
	search_terms_for,
	synthesize_id,
)

from conftest import FakeOMDbSession, FakeResponse, omdb_detail, omdb_hit


def make_client(session, api_key='test-key', sleeps=None):
	def sleep(seconds):
		if sleeps is not None:
			sleeps.append(seconds)
	return OMDbClient(api_key, request_delay=0.2, session=session, sleep=sleep)


def test_field_parsers():
	assert parse_rating('8.8') == 8.8
	assert parse_rating('N/A') is None
	assert parse_rating('nan') is None
	assert parse_vote_count('2,345,678') == 2345678
	assert parse_vote_count('lots') is None
	assert parse_runtime('148 min') == 148
	assert parse_runtime('N/A') is None
	assert parse_year('2010') == 2010
	assert parse_year('2008–2013') == 2008
	assert parse_year(None) is None


def test_synthesize_id():
	assert synthesize_id('tt1375666') == 1375666
	assert synthesize_id('tt0111161') == 111161
	assert synthesize_id('custom') == zlib.crc32(b'custom'), "stable across runs"


def test_map_detail():
	movie = map_detail(omdb_detail('tt1375666', 'Inception', genre='Action, Sci-Fi'))
	assert movie.id == 1375666
	assert movie.provider_id == 'tt1375666'
	assert movie.source is MovieSource.OMDB
	assert movie.key == (MovieSource.OMDB, 'tt1375666')
	assert movie.to_dict()['key'] == 'omdb:tt1375666'
	assert movie.vote_average == 8.8
	assert movie.vote_count == 2345678
	assert movie.runtime == 148
	assert movie.year == 2010 and movie.decade == 2010
	assert movie.genres == ('Action', 'Sci-Fi')
	assert movie.original_language == 'English', "first listed language"
	assert movie.poster_path == movie.backdrop_path, "poster doubles as backdrop"
	assert movie.production_companies == (), "'N/A' production means none"
	assert movie.cast_names == ['Leonardo DiCaprio', 'Joseph Gordon-Levitt', 'Elliot Page']
	assert movie.director == 'Christopher Nolan'
	assert (movie.budget, movie.revenue, movie.popularity) == (0, 0, 0.0)


def test_map_detail_not_available_fields():
	detail = omdb_detail(
		'tt0000001', 'Sparse', imdbRating='N/A', imdbVotes='N/A', Runtime='N/A',
		Year='N/A', Poster='N/A', Director='N/A', Actors='N/A', Plot='N/A',
	)
	del detail['Language']
	movie = map_detail(detail)
	assert movie.vote_average == 0.0
	assert movie.vote_count == 0
	assert movie.runtime == 0
	assert movie.year is None and movie.decade is None
	assert movie.poster_path is None and movie.backdrop_path is None
	assert movie.director is None
	assert movie.cast == ()
	assert movie.overview == ''
	assert movie.original_language == 'en'


def test_map_detail_lowercases_genres_and_uses_fallback_title():
	detail = omdb_detail('tt1', '', genre='Drama, War')
	movie = map_detail(detail, fallback_title='From search hit', lowercase_genres=True)
	assert movie.title == 'From search hit'
	assert movie.genres == ('drama', 'war')


def test_genre_matching_rules():
	assert genre_matches('Drama', ['drama'])
	assert genre_matches('sci-fi', ['action', 'science fiction'])
	assert genre_matches('Science Fiction', ['sci-fi'])
	assert genre_matches('war', ['war', 'history'])
	assert not genre_matches('horror', ['comedy', 'romance'])
	assert search_terms_for('Science Fiction') == ['sci-fi', 'science fiction']
	assert search_terms_for('Noir') == ['noir'], "unknown genres search for themselves"


def test_disabled_client_makes_no_calls():
	session = FakeOMDbSession({}, {})
	client = make_client(session, api_key='  ')
	assert not client.enabled
	assert client.fetch_by_genre('Noir') == []
	assert client.search_by_query('anything') == []
	assert session.calls == []


def test_blank_input_makes_no_calls():
	session = FakeOMDbSession({}, {})
	client = make_client(session)
	assert client.fetch_by_genre('  ') == []
	assert client.search_by_query('') == []
	assert session.calls == []


def test_fetch_by_genre_filters_and_throttles():
	session = FakeOMDbSession(
		searches={'western': [omdb_hit('tt1', 'Unforgiven'), omdb_hit('tt2', 'Not A Western')], 'cowboy': []},
		details={
			'tt1': omdb_detail('tt1', 'Unforgiven', genre='Drama, Western'),
			'tt2': omdb_detail('tt2', 'Not A Western', genre='Comedy'),
		},
	)
	sleeps = []
	movies = make_client(session, sleeps=sleeps).fetch_by_genre('Western')

	assert [m.title for m in movies] == ['Unforgiven']
	assert movies[0].genres == ('drama', 'western'), "genre fetch lowercases genres"
	assert session.detail_calls == 2
	assert sleeps == [0.2, 0.2], "one delay before every detail lookup"
	assert all(call['apikey'] == 'test-key' for call in session.calls)


def test_fetch_by_genre_caps_results():
	hits = [omdb_hit(f'tt{i}', f'Drama {i}') for i in range(1, 16)]
	details = {f'tt{i}': omdb_detail(f'tt{i}', f'Drama {i}') for i in range(1, 16)}
	session = FakeOMDbSession({'drama': hits, 'emotional': hits}, details)

	movies = make_client(session).fetch_by_genre('Drama')
	assert len(movies) == MAX_GENRE_RESULTS
	assert session.detail_calls == MAX_GENRE_RESULTS, "stops as soon as the cap is reached"
	assert [c['s'] for c in session.calls if 's' in c] == ['drama'], "second term never searched"


def test_fetch_by_genre_science_fiction_equivalence():
	session = FakeOMDbSession(
		searches={'sci-fi': [omdb_hit('tt0133093', 'The Matrix')]},
		details={'tt0133093': omdb_detail('tt0133093', 'The Matrix', genre='Action, Sci-Fi')},
	)
	movies = make_client(session).fetch_by_genre('Science Fiction')
	assert [m.title for m in movies] == ['The Matrix']


def test_failed_term_moves_on_to_the_next():
	session = FakeOMDbSession(
		searches={'drama': requests.ConnectionError('down'), 'emotional': [omdb_hit('tt9', 'Tearjerker')]},
		details={'tt9': omdb_detail('tt9', 'Tearjerker')},
	)
	movies = make_client(session).fetch_by_genre('drama')
	assert [m.title for m in movies] == ['Tearjerker']


def test_failed_details_are_skipped():
	session = FakeOMDbSession(
		searches={'heist': [
			omdb_hit('tt1', 'Missing'),
			omdb_hit('tt2', 'Timeout'),
			omdb_hit('tt3', 'Garbage'),
			omdb_hit('tt4', 'Server Error'),
			omdb_hit('tt5', 'Good'),
		]},
		details={
			'tt2': requests.Timeout('slow'),
			'tt3': FakeResponse(ValueError('not json')),
			'tt4': FakeResponse({}, status_code=500),
			'tt5': omdb_detail('tt5', 'Good'),
		},
	)
	movies = make_client(session).search_by_query('heist')
	assert [m.title for m in movies] == ['Good']
	assert session.detail_calls == 5


def test_search_by_query_respects_limit():
	hits = [omdb_hit(f'tt{i}', f'Movie {i}') for i in range(1, 6)]
	details = {f'tt{i}': omdb_detail(f'tt{i}', f'Movie {i}') for i in range(1, 6)}
	session = FakeOMDbSession({'movie': hits}, details)

	movies = make_client(session).search_by_query('  movie ', limit=3)
	assert [m.title for m in movies] == ['Movie 1', 'Movie 2', 'Movie 3']
	assert session.calls[0]['s'] == 'movie', "query is trimmed"
	assert session.calls[0]['type'] == 'movie'


def test_search_without_results_is_empty():
	session = FakeOMDbSession({}, {})
	assert make_client(session).search_by_query('zzzz') == []


def test_unexpected_errors_degrade_to_empty():
	class ExplodingSession:
		def get(self, url, params, timeout):
			raise RuntimeError('boom')

	client = make_client(ExplodingSession())
	assert client.search_by_query('anything') == []
	assert client.fetch_by_genre('Drama') == []
