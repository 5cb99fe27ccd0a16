"""
Models Package

Exports all models for easy importing.
"""

from portfolio.models.user import User
from portfolio.models.profile import PersonalInfo, ContactInfo, SiteSettings
from portfolio.models.content import Education, Experience, Project, Skill, Certification

# Content table for each collection / singleton name
COLLECTION_MODELS = {
    'education': Education,
    'experience': Experience,
    'projects': Project,
    'skills': Skill,
    'certifications': Certification,
}

SINGLETON_MODELS = {
    'personal_info': PersonalInfo,
    'contact_info': ContactInfo,
    'site_settings': SiteSettings,
}

__all__ = [
    'User', 'PersonalInfo', 'ContactInfo', 'SiteSettings',
    'Education', 'Experience', 'Project', 'Skill', 'Certification',
    'COLLECTION_MODELS', 'SINGLETON_MODELS',
]
