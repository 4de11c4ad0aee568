"""HTTP service for the generate-seo-content pipeline."""
