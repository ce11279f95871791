"""Registry — OCI-backed chart retrieval.

The registry layer provides:
- References: parse and validate ``host/path[:tag]`` strings
- Getter: pull, load and serialize a chart by ``oci://`` URL
- Local client: a directory-backed registry client for development
"""
