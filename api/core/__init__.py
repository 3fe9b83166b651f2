"""
Shared, cross-cutting code for the API.

`core/` should contain small building blocks that multiple features use
(settings, app context, Supabase and Gemini clients, error types, text
sanitizers). Keep feature-specific queries and business logic in the
corresponding feature package (e.g. `categories/`).
"""
