"""
Print a summary of the bundled movie catalog.

This script:
1) Loads movies from data/movies.json (or MOVIE_DIRECTORY_DATA_PATH)
2) Reports size, year range and genre counts
3) Lists the most popular genres, actors and directors
4) Shows the representative image chosen for each genre tile

Usage:
    python -m scripts.catalog_summary

Useful after editing the dataset: genre images are deterministic,
so the output only changes when the data does.
"""

from pathlib import Path  # filesystem-safe paths

from loguru import logger  # console logging

from movie_directory.catalog import MovieCatalog  # query engine
from movie_directory.config import get_settings  # env-driven settings
from movie_directory.data_loader import DataLoader  # data ingestion
from movie_directory.logging_config import configure_logging  # loguru sinks
from movie_directory.views import catalog_stats, genre_tiles  # home page stats and tiles


def main():
	settings = get_settings()
	configure_logging(settings.log_level)

	# Headline banner for visibility in console
	logger.info("=" * 60)
	logger.info("Movie Catalog Summary")
	logger.info("=" * 60)

	# Resolve the dataset relative to the project root unless absolute
	root = Path(__file__).resolve().parents[1]  # project root
	data_path = Path(settings.data_path)
	if not data_path.is_absolute():
		data_path = root / data_path

	# 1) Load data
	logger.info("[1/4] Loading movies...")
	catalog = MovieCatalog(DataLoader().load_movies(str(data_path)))

	# 2) Stats
	stats = catalog_stats(catalog)
	logger.info(f"\n[2/4] {stats['total']} movies | {stats['genres']} genres | years {stats['years']}")

	# 3) Popular lists
	logger.info("\n[3/4] Most popular:")
	logger.info(f"  genres:    {', '.join(catalog.popular_genres(10))}")
	logger.info(f"  actors:    {', '.join(catalog.popular_actors(10))}")
	logger.info(f"  directors: {', '.join(catalog.popular_directors(10))}")

	# 4) Genre tiles
	logger.info("\n[4/4] Genre tiles:")
	for tile in genre_tiles(catalog):
		logger.info(f"  {tile.name:<20} /{tile.slug:<20} {tile.count:>4}  {tile.image}")

	logger.info("=" * 60)


if __name__ == '__main__':
	main()
