"""Client-side submission workflow.

Holds the user's document and rules, talks to the verification service,
and exposes renderable state.
"""
