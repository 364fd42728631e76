"""
MedDent API - Models package

from models import CampaignCreate, ConsultationFormCreate, etc.
"""

# Auth
from .auth import (
    AdminLogin,
    CRMLogin,
    CRMUserCreate,
    CRMUserUpdate,
)

# Campaign links
from .campaign import (
    CampaignCreate,
    CampaignUpdate,
    ClickIncrement,
)

# Consultation forms (leads)
from .consultation import (
    LeadStatus,
    VALID_LEAD_STATUSES,
    ConsultationFormCreate,
    ConsultationFormUpdate,
)

# Settings / presets
from .settings import (
    SettingUpsert,
    SettingsBulkUpdate,
    PresetCreate,
    PresetUpdate,
)
from .site_config import SiteConfig, build_site_config

__all__ = [
    "AdminLogin",
    "CRMLogin",
    "CRMUserCreate",
    "CRMUserUpdate",
    "CampaignCreate",
    "CampaignUpdate",
    "ClickIncrement",
    "LeadStatus",
    "VALID_LEAD_STATUSES",
    "ConsultationFormCreate",
    "ConsultationFormUpdate",
    "SettingUpsert",
    "SettingsBulkUpdate",
    "PresetCreate",
    "PresetUpdate",
    "SiteConfig",
    "build_site_config",
]
