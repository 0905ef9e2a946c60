"""Static study-resource catalog.

Module scope:
- `resources`: catalog loading, search/filter, sorting, and facet listing for
  the `resources.json` file the site is built around.
"""
