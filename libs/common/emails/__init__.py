"""
JGL Email Package.

Modules:
- client: EmailClient for sending transactional email through the provider API
- templates: branded layout and the league's email templates
"""
