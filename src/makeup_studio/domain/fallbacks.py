"""Hardcoded content shown when the content store is empty or unreachable."""

from decimal import Decimal

from makeup_studio.domain.content import FAQ, AdminProfile, GalleryImage, Service

DEFAULT_PROFILE_IMAGE = (
    "https://res.cloudinary.com/dzrlbq2wf/image/upload/v1746067204/IMG_2972_htx11w.jpg"
)
DEFAULT_SECONDARY_IMAGE = (
    "https://res.cloudinary.com/dzrlbq2wf/image/upload/v1746067227/IMG_2974_t0paza.jpg"
)
PLACEHOLDER_IMAGE = "/static/placeholder.jpg"

DEFAULT_PROFILE = AdminProfile(
    id="default",
    user_id=None,
    email="4hisglorymakeup@gmail.com",
    bio=(
        "With over 10 years of experience in the beauty industry, I am dedicated "
        "to enhancing your natural beauty. My passion for makeup artistry began at "
        "a young age, and I have honed my skills through extensive training and "
        "hands-on experience. I specialize in creating timeless looks for brides, "
        "photo shoots, special events, quinceaneras and everyday glamour that make "
        "you feel confident and beautiful."
    ),
    bio_2=(
        "My commitment to excellence and attention to detail ensures that every "
        "client receives personalized service tailored to their unique features and "
        "preferences. Whether you're preparing for your wedding day, a special "
        "event, or just want to enhance your everyday look, I'm here to help you "
        "feel your most beautiful self."
    ),
    about_image_1=DEFAULT_PROFILE_IMAGE,
    about_image_1_path=None,
    about_image_2=DEFAULT_SECONDARY_IMAGE,
    about_image_2_path=None,
)


def _carousel(index: int, url: str, alt: str) -> GalleryImage:
    return GalleryImage(
        id=f"fallback-{index}",
        title=alt,
        category="",
        alt_text=alt,
        image_url=url,
        image_path=None,
        created_at=None,
    )


FALLBACK_CAROUSEL = [
    _carousel(
        1,
        "https://res.cloudinary.com/dzrlbq2wf/image/upload/v1745344480/IMG_2897_rqsnjs.png",
        "Bridal makeup",
    ),
    _carousel(
        2,
        "https://res.cloudinary.com/dzrlbq2wf/image/upload/v1745344461/IMG_2896_q8cvoo.png",
        "Fashion makeup",
    ),
    _carousel(
        3,
        "https://res.cloudinary.com/dzrlbq2wf/image/upload/v1745344410/IMG_2899_e0kn0e.png",
        "Special event makeup",
    ),
    _carousel(
        4,
        "https://res.cloudinary.com/dzrlbq2wf/image/upload/v1745344390/IMG_2900_buc2vo.png",
        "Natural makeup look",
    ),
]


def _service(  # noqa: PLR0913
    index: int,
    title: str,
    description: str,
    price: str,
    duration: int,
    category: str,
) -> Service:
    return Service(
        id=f"fallback-{index}",
        title=title,
        description=description,
        price=Decimal(price),
        duration=duration,
        category=category,
        image_url=None,
        featured=True,
        created_at=None,
    )


FALLBACK_SERVICES = [
    _service(
        1,
        "Bridal Makeup",
        "Look your best on your special day with personalized bridal makeup services.",
        "250",
        90,
        "bridal",
    ),
    _service(
        2,
        "Special Event",
        "Perfect makeup for photoshoots, galas, and other special occasions.",
        "120",
        60,
        "special_event",
    ),
    _service(
        3,
        "Makeup Lessons",
        "Learn professional makeup techniques tailored to your features and style.",
        "100",
        60,
        "lesson",
    ),
]


def _faq(index: int, question: str, answer: str, category: str) -> FAQ:
    return FAQ(
        id=f"fallback-{index}",
        question=question,
        answer=answer,
        category=category,
        display_order=index,
        created_at=None,
    )


FALLBACK_FAQS = [
    _faq(
        1,
        "What services do you offer?",
        "I offer bridal makeup, special event makeup, photoshoot makeup, editorial "
        "makeup, and personalized makeup lessons, each tailored to your features "
        "and style preferences.",
        "Services",
    ),
    _faq(
        2,
        "How far in advance should I book for my wedding?",
        "For weddings, I recommend booking 3-6 months in advance, especially during "
        "peak wedding season (May-October).",
        "Booking",
    ),
    _faq(
        3,
        "Do you offer trials for bridal makeup?",
        "Yes, I recommend scheduling a bridal trial 1-2 months before your wedding.",
        "Services",
    ),
    _faq(
        4,
        "Do you travel to clients?",
        "Yes, I offer on-location services for weddings and special events. Travel "
        "fees may apply depending on the distance.",
        "Services",
    ),
    _faq(
        5,
        "What is your cancellation policy?",
        "I require 48 hours notice for cancellations. Cancellations made with less "
        "than 48 hours notice may be subject to a 50% fee.",
        "Policies",
    ),
    _faq(
        6,
        "What forms of payment do you accept?",
        "Credit/debit cards, Venmo, and PayPal. Weddings and large events require a "
        "50% deposit to secure the date.",
        "Payment",
    ),
]

CONTACT_DETAILS = {
    "phone": "(469) 618-3804",
    "email": "4hisglorymakeup@gmail.com",
    "instagram": "https://www.instagram.com/4hisglorymakeup/",
}

AVAILABLE_TIMES = [f"{hour:02d}:00" for hour in range(9, 19)]
