"""
Exceptions raised inside the Movie Directory.
"""


class MovieDirectoryError(Exception):
	"""Base exception for the application."""


class OMDbError(MovieDirectoryError):
	"""A single OMDb request failed (network, HTTP status, payload or API-level error).

	Never leaves the OMDb client: callers always get a (possibly empty) list.
	"""

	def __init__(self, message: str, url: str = ''):
		super().__init__(message)
		self.url = url
