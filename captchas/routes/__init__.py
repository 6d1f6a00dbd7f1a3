"""HTTP routes for the captcha image service."""
