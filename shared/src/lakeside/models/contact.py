"""Contact form model."""

from pydantic import BaseModel


class ContactMessage(BaseModel):
    """A message submitted through the website contact form.

    Fields are optional so the route can report missing values itself.
    """

    name: str | None = None
    email: str | None = None
    message: str | None = None
    phone: str | None = None
