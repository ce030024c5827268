"""Authentication for the notification feed service."""

from feed.auth.oauth2 import OAuth2Authentication, OAuth2User

__all__ = ["OAuth2Authentication", "OAuth2User"]
