"""External collaborators: object storage and reCAPTCHA."""
