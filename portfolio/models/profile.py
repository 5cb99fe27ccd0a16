"""
Singleton Models

Personal info, contact info and site settings each hold exactly one row.
"""

from portfolio.extensions import db
from portfolio.models.base import ContentMixin


class PersonalInfo(ContentMixin, db.Model):
    __tablename__ = 'personal_info'

    id = db.Column(db.Integer, primary_key=True)
    full_name = db.Column(db.String(255))
    title = db.Column(db.String(255))
    subtitle = db.Column(db.String(255))
    bio = db.Column(db.Text)
    profile_image = db.Column(db.Text)
    resume_file = db.Column(db.Text)

    def __repr__(self):
        return f'<PersonalInfo {self.full_name}>'


class ContactInfo(ContentMixin, db.Model):
    __tablename__ = 'contact_info'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255))
    phone = db.Column(db.String(50))
    address = db.Column(db.Text)
    linkedin = db.Column(db.String(255))
    github = db.Column(db.String(255))
    facebook = db.Column(db.String(255))
    instagram = db.Column(db.String(255))
    twitter = db.Column(db.String(255))
    website = db.Column(db.String(255))

    def __repr__(self):
        return f'<ContactInfo {self.email}>'


class SiteSettings(ContentMixin, db.Model):
    __tablename__ = 'site_settings'

    id = db.Column(db.Integer, primary_key=True)
    site_title = db.Column(db.String(255))
    meta_description = db.Column(db.Text)
    favicon_url = db.Column(db.Text)
    primary_color = db.Column(db.String(20))
    secondary_color = db.Column(db.String(20))
    show_experience = db.Column(db.Boolean, default=True, nullable=False)
    show_projects = db.Column(db.Boolean, default=True, nullable=False)
    show_skills = db.Column(db.Boolean, default=True, nullable=False)
    show_certifications = db.Column(db.Boolean, default=True, nullable=False)

    def __repr__(self):
        return f'<SiteSettings {self.site_title}>'
