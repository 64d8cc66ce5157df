"""
Pydantic schemas for API request and response validation.

Field names follow the Portuguese columns of the Supabase schema so rows can
be passed straight into the response models. Embedded relations that vary by
select are typed as plain dicts.
"""
