"""API models for the contact endpoint."""

from pydantic import BaseModel


class ContactResponse(BaseModel):
    """Acknowledgement shown to the visitor after submitting the form."""

    success: bool = True
    message: str = "Thank you for your message. We will get back to you soon!"
