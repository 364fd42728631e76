"""
MedDent API - Site content collections

Each collection is plain CRUD, ordered by display_order, with a visibility
flag (is_active, or is_approved for reviews). Localized copies of text
fields use the _uz / _ru suffixes.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


# ==================== DOCTORS ====================

class DoctorCreate(BaseModel):
    name: str
    name_uz: Optional[str] = None
    name_ru: Optional[str] = None
    specialty: str
    specialty_uz: Optional[str] = None
    specialty_ru: Optional[str] = None
    image_url: Optional[str] = None
    bio: Optional[str] = None
    bio_uz: Optional[str] = None
    bio_ru: Optional[str] = None
    years_experience: int = 0
    education: Optional[str] = None
    education_uz: Optional[str] = None
    education_ru: Optional[str] = None
    is_active: bool = True
    display_order: int = 0


class DoctorUpdate(BaseModel):
    name: Optional[str] = None
    name_uz: Optional[str] = None
    name_ru: Optional[str] = None
    specialty: Optional[str] = None
    specialty_uz: Optional[str] = None
    specialty_ru: Optional[str] = None
    image_url: Optional[str] = None
    bio: Optional[str] = None
    bio_uz: Optional[str] = None
    bio_ru: Optional[str] = None
    years_experience: Optional[int] = None
    education: Optional[str] = None
    education_uz: Optional[str] = None
    education_ru: Optional[str] = None
    is_active: Optional[bool] = None
    display_order: Optional[int] = None


# ==================== REVIEWS ====================

class ReviewCreate(BaseModel):
    patient_name: str
    rating: int = Field(ge=1, le=5)
    review_text: str
    service_used: Optional[str] = None
    image_url: Optional[str] = None
    is_approved: bool = True
    is_result: bool = False
    display_order: int = 0


class ReviewUpdate(BaseModel):
    patient_name: Optional[str] = None
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    review_text: Optional[str] = None
    service_used: Optional[str] = None
    image_url: Optional[str] = None
    is_approved: Optional[bool] = None
    is_result: Optional[bool] = None
    display_order: Optional[int] = None


# ==================== FAQS ====================

class FAQCreate(BaseModel):
    question: str
    question_uz: Optional[str] = None
    question_ru: Optional[str] = None
    answer: str
    answer_uz: Optional[str] = None
    answer_ru: Optional[str] = None
    display_order: int = 0
    is_active: bool = True


class FAQUpdate(BaseModel):
    question: Optional[str] = None
    question_uz: Optional[str] = None
    question_ru: Optional[str] = None
    answer: Optional[str] = None
    answer_uz: Optional[str] = None
    answer_ru: Optional[str] = None
    display_order: Optional[int] = None
    is_active: Optional[bool] = None


# ==================== SERVICES (pricing) ====================

class ServiceCreate(BaseModel):
    title: str
    title_uz: Optional[str] = None
    title_ru: Optional[str] = None
    description: str
    description_uz: Optional[str] = None
    description_ru: Optional[str] = None
    detailed_description: Optional[str] = None
    detailed_description_uz: Optional[str] = None
    detailed_description_ru: Optional[str] = None
    price_from: Optional[float] = None
    duration_minutes: Optional[int] = None
    icon: Optional[str] = None
    image_url: Optional[str] = None
    is_active: bool = True
    display_order: int = 0


class ServiceUpdate(BaseModel):
    title: Optional[str] = None
    title_uz: Optional[str] = None
    title_ru: Optional[str] = None
    description: Optional[str] = None
    description_uz: Optional[str] = None
    description_ru: Optional[str] = None
    detailed_description: Optional[str] = None
    detailed_description_uz: Optional[str] = None
    detailed_description_ru: Optional[str] = None
    price_from: Optional[float] = None
    duration_minutes: Optional[int] = None
    icon: Optional[str] = None
    image_url: Optional[str] = None
    is_active: Optional[bool] = None
    display_order: Optional[int] = None


# ==================== PILL SECTIONS ====================

class PillSectionCreate(BaseModel):
    icon: str
    title: str
    title_uz: Optional[str] = None
    title_ru: Optional[str] = None
    description: str
    description_uz: Optional[str] = None
    description_ru: Optional[str] = None
    matrix_image_url: Optional[str] = None
    display_order: int = 0
    is_active: bool = True


class PillSectionUpdate(BaseModel):
    icon: Optional[str] = None
    title: Optional[str] = None
    title_uz: Optional[str] = None
    title_ru: Optional[str] = None
    description: Optional[str] = None
    description_uz: Optional[str] = None
    description_ru: Optional[str] = None
    matrix_image_url: Optional[str] = None
    display_order: Optional[int] = None
    is_active: Optional[bool] = None


# ==================== VALUE STACKING ====================

class ValueItemCreate(BaseModel):
    feature_name: str
    feature_name_uz: Optional[str] = None
    feature_name_ru: Optional[str] = None
    estimated_value: float
    display_order: int = 0
    is_active: bool = True


class ValueItemUpdate(BaseModel):
    feature_name: Optional[str] = None
    feature_name_uz: Optional[str] = None
    feature_name_ru: Optional[str] = None
    estimated_value: Optional[float] = None
    display_order: Optional[int] = None
    is_active: Optional[bool] = None


class DisplayOrderUpdate(BaseModel):
    display_order: int


# ==================== SECTION BACKGROUNDS ====================

class SectionBackgroundUpdate(BaseModel):
    image_url: Optional[str] = None
    opacity: Optional[str] = None


# ==================== FINAL CTA (singleton) ====================

class FinalCTAUpdate(BaseModel):
    is_active: Optional[bool] = None
    heading_line1: Optional[str] = None
    heading_line1_uz: Optional[str] = None
    heading_line1_ru: Optional[str] = None
    heading_highlight1: Optional[str] = None
    heading_highlight1_uz: Optional[str] = None
    heading_highlight1_ru: Optional[str] = None
    heading_line2: Optional[str] = None
    heading_line2_uz: Optional[str] = None
    heading_line2_ru: Optional[str] = None
    heading_line3: Optional[str] = None
    heading_line3_uz: Optional[str] = None
    heading_line3_ru: Optional[str] = None
    heading_highlight2: Optional[str] = None
    heading_highlight2_uz: Optional[str] = None
    heading_highlight2_ru: Optional[str] = None
    heading_highlight3: Optional[str] = None
    heading_highlight3_uz: Optional[str] = None
    heading_highlight3_ru: Optional[str] = None
    description: Optional[str] = None
    description_uz: Optional[str] = None
    description_ru: Optional[str] = None
    button_text: Optional[str] = None
    button_text_uz: Optional[str] = None
    button_text_ru: Optional[str] = None
    button_subtext: Optional[str] = None
    button_subtext_uz: Optional[str] = None
    button_subtext_ru: Optional[str] = None
    heading_line1_size: Optional[float] = None
    heading_highlight1_size: Optional[float] = None
    heading_line2_size: Optional[float] = None
    heading_line3_size: Optional[float] = None
    heading_highlight2_size: Optional[float] = None
    heading_highlight3_size: Optional[float] = None
    description_size: Optional[float] = None
    button_text_size: Optional[float] = None
    button_subtext_size: Optional[float] = None
    button_text_size_mobile: Optional[float] = None
    button_subtext_size_mobile: Optional[float] = None
    heading_alignment: Optional[str] = None
    description_alignment: Optional[str] = None
    button_alignment: Optional[str] = None


DEFAULT_FINAL_CTA = {
    "is_active": True,
    "heading_line1": "Ready to Transform",
    "heading_highlight1": "Your Smile?",
    "heading_line2": "",
    "heading_line3": "",
    "heading_highlight2": "",
    "heading_highlight3": "",
    "description": "Book your consultation today",
    "button_text": "Book Now",
    "button_subtext": "Free consultation",
    "heading_line1_size": 48,
    "heading_highlight1_size": 48,
    "heading_line2_size": 48,
    "heading_line3_size": 48,
    "heading_highlight2_size": 48,
    "heading_highlight3_size": 48,
    "description_size": 18,
    "button_text_size": 18,
    "button_subtext_size": 14,
    "heading_alignment": "center",
    "description_alignment": "center",
    "button_alignment": "center",
}


# ==================== APPOINTMENTS ====================

class BookingType(str, Enum):
    QUICK = "quick"
    SCHEDULED = "scheduled"


class AppointmentStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class AppointmentCreate(BaseModel):
    patient_name: str
    phone: str
    email: Optional[str] = None
    service_id: Optional[str] = None
    doctor_id: Optional[str] = None
    preferred_date: Optional[str] = None
    preferred_time: Optional[str] = None
    message: Optional[str] = None
    booking_type: BookingType = BookingType.SCHEDULED


class AppointmentUpdate(BaseModel):
    patient_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    service_id: Optional[str] = None
    doctor_id: Optional[str] = None
    preferred_date: Optional[str] = None
    preferred_time: Optional[str] = None
    message: Optional[str] = None
    booking_type: Optional[BookingType] = None
    status: Optional[AppointmentStatus] = None
