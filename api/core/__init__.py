"""
Shared, cross-cutting code for the API.

`core/` holds the small building blocks every listing endpoint uses (DB pool,
settings, logging, error rendering, pagination and sort parsing). Keep
resource-specific SQL and response shaping in the corresponding feature
package (e.g. `events/`).
"""
