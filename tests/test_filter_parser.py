"""
Unit tests for query-string parsing and page titles on the /movies listing.
"""

from movie_directory.filter_parser import build_page_title, join_names, parse_filter_params
from movie_directory.models import MovieFilterOptions


def test_parse_filter_params(catalog):
	options = parse_filter_params({
		'genre': ['sciencefiction', 'film-noir'],
		'actor': ' Tom Hanks ',
		'director': ['Christopher Nolan'],
		'year': ['1994', 'abc'],
		'decade': '1990',
		'minRating': '8',
		'minVoteCount': 'many',
	}, catalog)

	assert options.genres == ['Science Fiction', 'film-noir'], "known slugs resolve, unknown ones pass through"
	assert options.actors == ['Tom Hanks']
	assert options.directors == ['Christopher Nolan']
	assert options.years == [1994], "non-numeric years dropped"
	assert options.decades == [1990]
	assert options.min_rating == 8.0
	assert options.min_vote_count is None


def test_parse_empty_params(catalog):
	options = parse_filter_params({'genre': ['', '  '], 'minRating': 'high'}, catalog)
	assert options.is_empty()
	assert catalog.filter(options) == catalog.all_movies()


def test_parsed_filter_runs_against_catalog(catalog):
	options = parse_filter_params({'genre': 'drama', 'decade': '1990', 'minRating': '8.5'}, catalog)
	assert [m.title for m in catalog.filter(options)] == ['The Shawshank Redemption', 'Forrest Gump']


def test_join_names():
	assert join_names(['A']) == 'A'
	assert join_names(['A', 'B']) == 'A & B'
	assert join_names(['A', 'B', 'C']) == 'A, B & C'


def test_build_page_title():
	assert build_page_title(MovieFilterOptions()) == 'Best Movies'
	assert build_page_title(MovieFilterOptions(genres=['Action', 'Thriller'])) == 'Best Action & Thriller Movies'
	assert build_page_title(MovieFilterOptions(actors=['Tom Hanks'])) == 'Best Movies Featuring Tom Hanks'
	assert build_page_title(MovieFilterOptions(directors=['Christopher Nolan'])) == 'Best Movies By Christopher Nolan'
	assert build_page_title(MovieFilterOptions(decades=[1990, 2000])) == 'Best Movies From the 1990s, 2000s'
	assert build_page_title(MovieFilterOptions(genres=['Drama'], actors=['Tom Hanks'])) == 'Best Drama Featuring Tom Hanks Movies'
