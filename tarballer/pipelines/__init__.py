"""Pipeline stages: folder discovery and the tarball/remove orchestration."""
