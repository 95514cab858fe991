"""
Source root for the branch dispatch API.
The HTTP service lives in `src.api`; process-wide helpers live in `src.common`.
"""
