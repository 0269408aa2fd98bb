"""Utility functions."""

from livingmeta.utils.text import clean_abstract, doi_url, strip_doi_prefix

__all__ = ["clean_abstract", "doi_url", "strip_doi_prefix"]
