"""
Streamlit UI for the Movie Directory.
Browses the local catalog in-process; search calls the FastAPI server when it is reachable
(so OMDb enrichment runs server-side), otherwise runs the same search engine locally.

Run API (optional):   uvicorn api:app --reload
Run UI:                streamlit run streamlit_app.py
"""

# HTTP client to call the API when running in API mode
import requests  # make web requests to the FastAPI server
# Streamlit framework to build a simple interactive UI
import streamlit as st  # UI primitives
from typing import Any, Dict, List, Optional  # type hints

# Local engine imports (catalog browsing always runs in-process)
from movie_directory.config import get_settings  # env-driven settings
from movie_directory.filter_parser import FILTER_PARAMS, build_page_title, parse_filter_params  # listing filters and titles
from movie_directory.images import is_usable_image_url  # skip placeholder images
from movie_directory.models import Movie  # core record
from movie_directory.ranking import SORT_LABELS, SortOption, sort_movies  # user sort orders
from movie_directory.search_engine import SearchEngine  # local + remote search
from movie_directory.slugs import genre_to_slug  # genre links
from movie_directory.views import catalog_stats, genre_tiles, movie_card, permutation_links, run_with_minimum_duration

from api import build_engine  # same wiring as the API process

from loguru import logger  # console logger

MIN_LOADER_SECONDS = 0.6  # keep the search spinner visible at least this long
CARDS_PER_ROW = 5
PAGES = ["Home", "Genres", "Movies", "Search"]
MOVIES_LINK_PREFIX = "?page=Movies&"  # permutation links reopen the Movies page with their filters

# Configure Streamlit page (title and layout width)
st.set_page_config(page_title="Movie Directory", layout="wide")  # wide layout

# Session state: sort selection, open detail panel, last query
st.session_state.setdefault("sort_by", SortOption.RATING_DESC.value)
st.session_state.setdefault("active_movie", None)
st.session_state.setdefault("previous_query", "")


# Cache the engine so the catalog is loaded once per server process
@st.cache_resource(show_spinner=True)
def init_local_engine() -> Optional[SearchEngine]:
	"""Load the catalog and wire the OMDb client, like the API does at startup."""
	try:
		return build_engine()
	except (FileNotFoundError, ValueError) as e:
		st.error(f"Failed to load the movie catalog: {e}")
		return None


def api_is_available(api_url: Optional[str]) -> bool:
	if not api_url:
		return False
	try:
		return requests.get(f"{api_url}/health", timeout=3).ok  # ping API health endpoint
	except requests.RequestException:
		return False


def show_image(url: str) -> None:
	"""Placeholders are site-relative paths with no file behind them here."""
	if is_usable_image_url(url):
		st.image(url, width='stretch')
	else:
		st.caption("🎞️ No image")


def open_details(movie: Dict[str, Any]) -> None:
	st.session_state["active_movie"] = movie


def render_detail_panel() -> None:
	"""Expanded card for the movie the user clicked, with a close button."""
	movie = st.session_state.get("active_movie")
	if not movie:
		return
	card = movie_card(movie)
	with st.container(border=True):
		c1, c2 = st.columns([1, 3])
		with c1:
			show_image(card['poster'])
		with c2:
			st.subheader(f"{card['title']} ({card['year'] or 'N/A'})")
			if card['tagline']:
				st.caption(card['tagline'])
			st.write(card['overview'])
			st.write(f"**Rating:** {card['rating']} ({card['votes']} votes) | **Runtime:** {card['runtime']}")
			st.write(f"**Genres:** {card['genres']}")
			st.write(f"**Director:** {card['director']}")
			st.write(f"**Cast:** {card['cast']}")
			st.write(f"**Budget:** {card['budget']} | **Revenue:** {card['revenue']}")
			if card['source'] != 'local':
				st.caption("Source: OMDb")
			if st.button("Close", key="close_details"):
				st.session_state["active_movie"] = None
				st.rerun()


def render_movie_grid(movies: List[Dict[str, Any]], key_prefix: str) -> None:
	"""Poster grid; each card opens the detail panel."""
	for row_start in range(0, len(movies), CARDS_PER_ROW):
		cols = st.columns(CARDS_PER_ROW)
		for offset, movie in enumerate(movies[row_start:row_start + CARDS_PER_ROW]):
			card = movie_card(movie)
			with cols[offset]:
				show_image(card['poster'])
				st.write(f"**{card['title']}**")
				st.caption(f"{card['year'] or 'N/A'} | {card['rating']}")
				st.button(
					"Details",
					key=f"{key_prefix}_{movie['key']}",
					on_click=open_details,
					args=(movie,),
				)


def sorted_payload(movies: List[Movie], key: str) -> List[Dict[str, Any]]:
	"""Sort selector + serialization for grids."""
	options = list(SORT_LABELS.keys())
	choice = st.selectbox(
		"Sort by",
		options,
		index=options.index(SortOption(st.session_state["sort_by"])),
		format_func=lambda o: SORT_LABELS[o],
		key=f"sort_{key}",
	)
	st.session_state["sort_by"] = choice.value
	return [m.to_dict() for m in sort_movies(movies, choice)]


engine = init_local_engine()
if engine is None:
	st.stop()
catalog = engine.catalog

# Sidebar contains navigation and configuration controls
with st.sidebar:
	st.header("Movie Directory")
	requested_page = st.query_params.get("page", PAGES[0])  # set by permutation links
	page = st.radio("Browse", PAGES, index=PAGES.index(requested_page) if requested_page in PAGES else 0)
	api_url = st.text_input("API URL", get_settings().api_url or "http://localhost:8000")

render_detail_panel()

if page == "Home":
	stats = catalog_stats(catalog)
	st.title("🎬 Movie Directory")
	st.write(f"Explore our curated collection of {stats['total']:,} movies from {stats['years']}.")
	c1, c2, c3 = st.columns(3)
	c1.metric("Movies", f"{stats['total']:,}")
	c2.metric("Genres", stats['genres'])
	c3.metric("Years", stats['years'])
	st.subheader("Genres")
	st.write(" · ".join(catalog.all_genres()))
	st.subheader("Top Rated Movies")
	render_movie_grid([m.to_dict() for m in catalog.top_rated(10)], "top")

elif page == "Genres":
	st.title("Browse by Genre")
	tiles = genre_tiles(catalog)
	slugs = [t.slug for t in tiles]
	selected = st.selectbox("Genre", slugs, format_func=lambda s: tiles[slugs.index(s)].name) if tiles else None
	manual = st.text_input("...or type any genre", placeholder="e.g. film-noir")
	slug = genre_to_slug(manual) if manual.strip() else selected

	if slug:
		with st.spinner("Loading genre..."):
			genre_page = engine.genre_page(slug)
		if not genre_page.movies:
			st.warning(f"No movies found for '{genre_page.name}'.")
			if genre_page.suggestion:
				st.info(f"Did you mean **{genre_page.suggestion}**?")
		else:
			st.subheader(f"{genre_page.name} Movies")
			if genre_page.from_remote:
				st.caption("Not in our catalog yet; showing results from OMDb.")
			render_movie_grid(sorted_payload(genre_page.movies, "genre"), "genre")

	st.divider()
	for row_start in range(0, len(tiles), CARDS_PER_ROW):
		cols = st.columns(CARDS_PER_ROW)
		for offset, tile in enumerate(tiles[row_start:row_start + CARDS_PER_ROW]):
			with cols[offset]:
				show_image(tile.image)
				st.caption(f"{tile.name} ({tile.count})")

elif page == "Movies":
	# Filters in the URL (permutation links) seed the widgets
	from_url = parse_filter_params({key: st.query_params.get_all(key) for key in FILTER_PARAMS}, catalog)
	genre_choices = catalog.all_genres()
	actor_choices = catalog.popular_actors(50)
	actor_choices += [a for a in from_url.actors if a not in actor_choices]
	director_choices = catalog.popular_directors(50)
	director_choices += [d for d in from_url.directors if d not in director_choices]

	with st.sidebar:
		st.subheader("Filters")
		genres = st.multiselect("Genres (all of)", genre_choices, default=[g for g in from_url.genres if g in genre_choices])
		actors = st.multiselect("Actors (all of)", actor_choices, default=from_url.actors)
		directors = st.multiselect("Directors (any of)", director_choices, default=from_url.directors)
		min_rating = st.slider("Minimum rating", 0.0, 10.0, min(max(from_url.min_rating or 0.0, 0.0), 10.0), 0.5)
	params = {
		"genre": [genre_to_slug(g) for g in genres],
		"actor": actors,
		"director": directors,
		"year": [str(y) for y in from_url.years],
		"decade": [str(d) for d in from_url.decades],
		"minRating": [str(min_rating)] if min_rating > 0 else [],
		"minVoteCount": [str(from_url.min_vote_count)] if from_url.min_vote_count is not None else [],
	}
	options = parse_filter_params(params, catalog)
	movies = catalog.filter(options)
	st.title(build_page_title(options))
	st.write(f"Discover {len(movies)} amazing {'movie' if len(movies) == 1 else 'movies'}")

	st.subheader("Explore Movie Permutations")
	links = permutation_links(
		catalog.popular_genres(10), catalog.popular_actors(10), catalog.popular_directors(10),
		prefix=MOVIES_LINK_PREFIX,
	)
	st.write(" · ".join(f"[{link.label}]({link.href})" for link in links))

	if movies:
		render_movie_grid(sorted_payload(movies, "movies"), "movies")
	else:
		st.info("No movies match these filters.")

else:
	st.title("Search")
	query = st.text_input("Search by title, actor or director", placeholder="e.g. Inception, Tom Hanks, Nolan")

	if query.strip() and query != st.session_state["previous_query"]:
		# text_input only reruns on Enter or blur, so each new query is a finished one
		logger.info(f"[UI] New search '{query.strip()}'")
		st.session_state["previous_query"] = query

	if query.strip():
		use_api = api_is_available(api_url)
		with st.spinner("Searching..."):
			try:
				if use_api:
					# API mode: OMDb enrichment runs on the server
					def call_api():
						resp = requests.get(f"{api_url}/api/search", params={"q": query}, timeout=60)
						resp.raise_for_status()  # raise error if server responded with an error code
						return resp.json()
					payload = run_with_minimum_duration(call_api, MIN_LOADER_SECONDS)
				else:
					payload = run_with_minimum_duration(lambda: engine.search(query).to_dict(), MIN_LOADER_SECONDS)
			except requests.RequestException as e:  # network/API errors
				logger.error(f"[UI] API search failed: {e}")
				st.error(f"API request failed: {e}")
				payload = None

		if payload is not None:
			st.success(
				f"Found {payload['totalCount']} movies "
				f"({payload['localCount']} from our catalog, {payload['omdbCount']} from OMDb)"
			)
			if payload['movies']:
				render_movie_grid(payload['movies'], "search")
			else:
				st.info(f"No movies found for '{payload['query']}'.")

# Show a footer indicator of current mode
st.sidebar.markdown("---")  # separator
st.sidebar.caption("OMDb enrichment: " + ("on" if engine.omdb.enabled else "off (set OMDB_API_KEY)"))
