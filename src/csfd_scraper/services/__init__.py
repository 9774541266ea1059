from .scraper import CsfdScraper, build_search_path

__all__ = ["CsfdScraper", "build_search_path"]
