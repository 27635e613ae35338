# ABOUTME: Collaborators injected into the lookup core
# ABOUTME: HTTP transport on httpx and key/value translation
