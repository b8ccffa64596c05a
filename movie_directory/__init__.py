"""Movie Directory: curated movie catalog with filtering, search and OMDb enrichment."""
