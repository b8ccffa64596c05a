"""
FastAPI server exposing the Movie Directory API.
Endpoints:
- GET /health: basic health check
- GET /api/search?q=...: local + OMDb search, de-duplicated by title
- GET /api/movies/genre/{genre}: OMDb movies for a genre missing from the catalog
- GET /api/movies, /api/movies/top-rated, /api/movies/{id}: catalog browsing
- GET /api/genres, /api/genres/{slug}: genre tiles and genre pages

Startup loads the bundled catalog once; it is read-only for the process lifetime.

Run: uvicorn api:app --reload
"""

# Import standard libraries for timing
import time  # measure startup latency
from typing import List, Optional  # precise typing for clarity

# Import FastAPI for building the web API and Pydantic for response models
from fastapi import Depends, FastAPI, Query, Request  # FastAPI primitives
from fastapi.responses import JSONResponse  # explicit error payloads
from pydantic import BaseModel  # response schema definitions

# Import our internal modules for data loading and search
from movie_directory.catalog import MovieCatalog  # local query engine
from movie_directory.config import get_settings  # env-driven settings
from movie_directory.data_loader import DataLoader  # loads the bundled dataset
from movie_directory.filter_parser import build_page_title, parse_filter_params  # /movies permutations
from movie_directory.logging_config import configure_logging  # loguru sinks
from movie_directory.models import Movie  # core record
from movie_directory.omdb_client import OMDbClient  # remote enrichment
from movie_directory.ranking import SortOption, sort_movies  # listing order
from movie_directory.search_engine import SearchEngine  # local + remote search
from movie_directory.views import genre_tiles  # genre grid view model

# Import loguru for simple, structured console logging
from loguru import logger  # convenient console logger

# Instantiate the FastAPI application with metadata
app = FastAPI(title="Movie Directory API", version="1.0.0")  # web app

# Globals that hold the search engine instance and measured startup time
ENGINE: Optional[SearchEngine] = None  # built on first use or at startup
STARTUP_TIME_S: float = 0.0  # measures how long startup took


class CastOut(BaseModel):
	name: str
	character: str = ''
	profilePath: Optional[str] = None


# Pydantic model that describes the shape of a single movie in responses
class MovieOut(BaseModel):
	id: int
	title: str
	tagline: str
	overview: str
	releaseDate: str
	popularity: float
	voteAverage: float
	voteCount: int
	runtime: int
	budget: int
	revenue: int
	originalLanguage: str
	status: str
	genres: List[str]
	keywords: List[str]
	productionCompanies: List[str]
	posterPath: Optional[str] = None
	backdropPath: Optional[str] = None
	cast: List[CastOut]
	director: Optional[str] = None
	year: Optional[int] = None
	decade: Optional[int] = None
	source: str  # 'local' or 'omdb'
	providerId: Optional[str] = None  # imdb id for OMDb records
	key: str  # cross-source identity, "<source>:<id>"

	@classmethod
	def from_movie(cls, movie: Movie) -> "MovieOut":
		return cls(**movie.to_dict())


class SearchResponse(BaseModel):
	query: str  # trimmed query string
	localCount: int  # matches in the catalog
	omdbCount: int  # OMDb results before de-duplication
	totalCount: int  # merged result size
	movies: List[MovieOut]


class MoviesResponse(BaseModel):
	movies: List[MovieOut]


class MovieListingResponse(BaseModel):
	title: str  # e.g. 'Best Action Movies'
	count: int
	movies: List[MovieOut]


class GenreTileOut(BaseModel):
	name: str
	slug: str
	count: int
	image: str


class GenresResponse(BaseModel):
	genres: List[GenreTileOut]


class GenrePageResponse(BaseModel):
	slug: str
	name: str
	known: bool  # genre exists in the catalog
	fromRemote: bool  # movies came from OMDb
	suggestion: Optional[str] = None  # "did you mean" hint
	movies: List[MovieOut]


def build_engine() -> SearchEngine:
	"""Load the catalog and wire the OMDb client from settings."""
	settings = get_settings()  # env / .env values
	loader = DataLoader()  # create loader instance
	movies = loader.load_movies(settings.data_path)  # read dataset (fatal if missing)
	omdb = OMDbClient(
		api_key=settings.omdb_api_key,
		base_url=settings.omdb_base_url,
		request_delay=settings.omdb_request_delay,
		timeout=settings.omdb_timeout,
	)
	if not omdb.enabled:
		logger.warning("[API] OMDB_API_KEY not set; remote enrichment disabled")
	return SearchEngine(MovieCatalog(movies), omdb, remote_limit=settings.search_remote_limit)


def get_engine() -> SearchEngine:
	"""Dependency returning the process-wide engine (built lazily if startup did not run)."""
	global ENGINE
	if ENGINE is None:
		ENGINE = build_engine()
	return ENGINE


# FastAPI startup hook to initialize the engine once
@app.on_event("startup")
async def startup_event():
	"""Load the catalog and log how long it took."""
	global ENGINE, STARTUP_TIME_S  # refer to module-level globals
	configure_logging(get_settings().log_level)  # one stderr sink at the configured level
	start = time.time()  # start timer for startup latency

	logger.info("[API] Startup: loading catalog...")  # log intent
	ENGINE = build_engine()  # create engine

	STARTUP_TIME_S = time.time() - start  # elapsed seconds
	logger.info(f"[API] Startup complete in {STARTUP_TIME_S:.2f}s with {len(ENGINE.catalog)} movies.")  # summary


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
	"""Input validation errors raised by the engine become 400 responses."""
	logger.info(f"[API] 400 on {request.url.path}: {exc}")
	return JSONResponse(status_code=400, content={"error": str(exc)})


# Simple health endpoint for readiness checks
@app.get("/health")
async def health(engine: SearchEngine = Depends(get_engine)):
	"""Return minimal health info for liveness/readiness probes."""
	return {
		"status": "ok",  # constant indicator
		"movies": len(engine.catalog),  # dataset size
		"omdb_enabled": engine.omdb.enabled,  # remote enrichment available
		"startup_seconds": round(STARTUP_TIME_S, 2),  # startup latency
	}


# Sync endpoints: OMDb calls block, FastAPI runs these in its threadpool
@app.get("/api/search", response_model=SearchResponse)
def search(q: Optional[str] = Query(None, description="Title, actor or director"), engine: SearchEngine = Depends(get_engine)):
	"""Search the catalog and OMDb; local results come first."""
	if q is None or not q.strip():  # missing or blank query
		return JSONResponse(status_code=400, content={"error": "Query parameter is required"})

	logger.debug(f"[API] /api/search q='{q}'")  # debug log of input
	result = engine.search(q)  # run search
	return SearchResponse(
		query=result.query,
		localCount=result.local_count,
		omdbCount=result.omdb_count,
		totalCount=result.total_count,
		movies=[MovieOut.from_movie(m) for m in result.movies],
	)


@app.get("/api/movies/genre/{genre}", response_model=MoviesResponse)
def movies_by_genre(genre: str, engine: SearchEngine = Depends(get_engine)):
	"""OMDb movies for a genre (used when the catalog lacks it)."""
	try:
		movies = engine.movies_by_genre(genre)
	except Exception:
		logger.exception(f"[API] Error fetching movies from OMDB for genre '{genre}'")
		return JSONResponse(status_code=500, content={"error": "Failed to fetch movies from OMDB"})
	return MoviesResponse(movies=[MovieOut.from_movie(m) for m in movies])


@app.get("/api/movies", response_model=MovieListingResponse)
async def list_movies(request: Request, sort: SortOption = SortOption.RATING_DESC, engine: SearchEngine = Depends(get_engine)):
	"""Filtered listing; query parameters may repeat (?genre=action&genre=thriller)."""
	params = {key: request.query_params.getlist(key) for key in request.query_params.keys() if key != 'sort'}
	options = parse_filter_params(params, engine.catalog)
	movies = sort_movies(engine.catalog.filter(options), sort)
	return MovieListingResponse(
		title=build_page_title(options),
		count=len(movies),
		movies=[MovieOut.from_movie(m) for m in movies],
	)


@app.get("/api/movies/top-rated", response_model=MoviesResponse)
async def top_rated(limit: int = Query(10, ge=1, le=250), engine: SearchEngine = Depends(get_engine)):
	return MoviesResponse(movies=[MovieOut.from_movie(m) for m in engine.catalog.top_rated(limit)])


@app.get("/api/movies/{movie_id}", response_model=MovieOut)
async def movie_detail(movie_id: int, engine: SearchEngine = Depends(get_engine)):
	movie = engine.catalog.by_id(movie_id)
	if movie is None:
		return JSONResponse(status_code=404, content={"error": "Movie not found"})
	return MovieOut.from_movie(movie)


@app.get("/api/genres", response_model=GenresResponse)
async def genres(engine: SearchEngine = Depends(get_engine)):
	tiles = genre_tiles(engine.catalog)
	return GenresResponse(genres=[GenreTileOut(name=t.name, slug=t.slug, count=t.count, image=t.image) for t in tiles])


@app.get("/api/genres/{slug}", response_model=GenrePageResponse)
def genre_page(slug: str, engine: SearchEngine = Depends(get_engine)):
	"""Local movies for a genre, OMDb fallback when the catalog has none."""
	page = engine.genre_page(slug)
	if not page.movies:
		return JSONResponse(
			status_code=404,
			content={"error": f"No movies found for genre '{page.name}'", "suggestion": page.suggestion},
		)
	return GenrePageResponse(
		slug=page.slug,
		name=page.name,
		known=page.known,
		fromRemote=page.from_remote,
		suggestion=page.suggestion,
		movies=[MovieOut.from_movie(m) for m in page.movies],
	)
