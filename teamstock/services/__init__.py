"""
Services Layer
Read-only aggregations used primarily by routes.

Services should:
- Not modify records or business rules
- Read from several repositories to aggregate information
- Be stateless where possible
"""
