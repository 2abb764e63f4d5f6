"""
Storefront Gateway Service package.

The gateway fronts a third-party storefront GraphQL API:
- Negotiation: Accept-header driven choice of HTML, JSON or plain text
- Routing: one catch-all route dispatching on (method, segment count, kind)
- Catalog: upstream response transformation with checked field access
- Rendering: template substitution and JSON payloads

Structure:
- app.main: FastAPI app, routes, and service wiring.
- app.adapters: HTTP client and GraphQL payloads for the provider.
- app.catalog: normalized records and response transformers.
- app.negotiation / app.routing / app.rendering: request pipeline stages.
"""
