"""Command-line front end for tfs_versions_core."""
