# ABOUTME: Data extraction from the Wikipedia API
# ABOUTME: Fetching, redirect resolution, infobox parsing and body sanitizing

"""
Extraction Layer: Turn raw wiki text into display-ready pieces

This layer handles:
- Page and image metadata requests against the MediaWiki API
- Redirect detection on fetched pages
- Infobox and image discovery with balanced bracket scanning
- Sanitizing the lead section into an HTML fragment

Data Flow: MediaWiki API → RawPage → ResolvedPage → AuthorInfo pieces
"""
