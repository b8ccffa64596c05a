"""
Poster and backdrop URL helpers.
Relative paths resolve against the TMDB image CDN; absolute URLs (OMDb posters) pass through.
"""

from typing import Optional

TMDB_IMAGE_BASE = 'https://image.tmdb.org/t/p'
NO_POSTER = '/no-poster.svg'
NO_BACKDROP = '/no-backdrop.svg'

POSTER_SIZES = ('w200', 'w500', 'original')
BACKDROP_SIZES = ('w780', 'w1280', 'original')


def _resolve(path: Optional[str], size: str, placeholder: str) -> str:
	if is_placeholder_reference(path):  # missing, blank or a sentinel like /no-poster.svg
		return placeholder
	if path.startswith('http://') or path.startswith('https://'):
		return path
	normalized = path if path.startswith('/') else f'/{path}'
	return f'{TMDB_IMAGE_BASE}/{size}{normalized}'


def poster_url(poster_path: Optional[str], size: str = 'w500') -> str:
	"""Full poster URL, or the local placeholder when there is no poster."""
	if size not in POSTER_SIZES:
		raise ValueError(f"Unsupported poster size: {size}")
	return _resolve(poster_path, size, NO_POSTER)


def backdrop_url(backdrop_path: Optional[str], size: str = 'w1280') -> str:
	"""Full backdrop URL, or the local placeholder when there is no backdrop."""
	if size not in BACKDROP_SIZES:
		raise ValueError(f"Unsupported backdrop size: {size}")
	return _resolve(backdrop_path, size, NO_BACKDROP)


def is_placeholder_reference(value: Optional[str]) -> bool:
	"""True for missing references and the placeholder sentinels some records carry."""
	if not value or not value.strip():
		return True
	return 'no-poster' in value or 'no-backdrop' in value or 'placeholder' in value


def is_usable_image_url(url: str) -> bool:
	return not is_placeholder_reference(url) and (url.startswith('http://') or url.startswith('https://'))
