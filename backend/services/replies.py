# backend/services/replies.py
"""Suggested replies for reviews.

Ratings at or below ``NEGATIVE_RATING_THRESHOLD`` get an apology, anything
above gets a thank-you note.
"""

NEGATIVE_RATING_THRESHOLD = 3


def build_reply(author, rating, business_name):
    reply = f"Hi {author or 'there'},\n\n"

    if rating <= NEGATIVE_RATING_THRESHOLD:
        reply += (
            f"Thank you for your feedback and for giving us a chance. We're sorry your experience at "
            f"{business_name} didn't fully meet your expectations. "
            "We take comments like yours seriously and will use them to improve our service. "
            "If you're open to it, please reach out to us directly so we can make this right.\n\n"
        )
    else:
        reply += (
            "Thank you so much for the great review and for taking the time to share your experience at "
            f"{business_name}! "
            "We're glad you enjoyed your visit and hope to see you again soon.\n\n"
        )

    reply += f"– The {business_name} Team"
    return reply
