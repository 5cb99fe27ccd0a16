"""
Collection Models

Independent ordered collections; ids come from an autoincrement sequence and
are never handed out twice, even on SQLite.
"""

from portfolio.extensions import db
from portfolio.models.base import ContentMixin

_table_args = {'sqlite_autoincrement': True}


class Education(ContentMixin, db.Model):
    __tablename__ = 'education'
    __table_args__ = _table_args

    id = db.Column(db.Integer, primary_key=True)
    institution = db.Column(db.String(255), nullable=False)
    degree = db.Column(db.String(255))
    field = db.Column(db.String(255))
    start_year = db.Column(db.String(20))
    end_year = db.Column(db.String(20))
    gpa = db.Column(db.String(20))
    description = db.Column(db.Text)
    logo = db.Column(db.Text)
    is_current = db.Column(db.Boolean, default=False, nullable=False)
    sort_order = db.Column(db.Integer, default=0, nullable=False)

    def __repr__(self):
        return f'<Education {self.institution}>'


class Experience(ContentMixin, db.Model):
    __tablename__ = 'experience'
    __table_args__ = _table_args

    id = db.Column(db.Integer, primary_key=True)
    company = db.Column(db.String(255), nullable=False)
    position = db.Column(db.String(255))
    location = db.Column(db.String(255))
    start_date = db.Column(db.String(50))
    end_date = db.Column(db.String(50))
    description = db.Column(db.Text)
    achievements = db.Column(db.Text)
    logo = db.Column(db.Text)
    is_current = db.Column(db.Boolean, default=False, nullable=False)
    sort_order = db.Column(db.Integer, default=0, nullable=False)

    def __repr__(self):
        return f'<Experience {self.position} at {self.company}>'


class Project(ContentMixin, db.Model):
    __tablename__ = 'projects'
    __table_args__ = _table_args

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    category = db.Column(db.String(100))
    technologies = db.Column(db.Text)
    image = db.Column(db.Text)
    link = db.Column(db.Text)
    github_link = db.Column(db.Text)
    featured = db.Column(db.Boolean, default=False, nullable=False)
    sort_order = db.Column(db.Integer, default=0, nullable=False)

    def __repr__(self):
        return f'<Project {self.title}>'


class Skill(ContentMixin, db.Model):
    __tablename__ = 'skills'
    __table_args__ = _table_args

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    category = db.Column(db.String(50))
    level = db.Column(db.Integer, default=50)
    icon = db.Column(db.String(255))
    sort_order = db.Column(db.Integer, default=0, nullable=False)

    def __repr__(self):
        return f'<Skill {self.name}>'


class Certification(ContentMixin, db.Model):
    __tablename__ = 'certifications'
    __table_args__ = _table_args

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    issuer = db.Column(db.String(255))
    date = db.Column(db.String(50))
    expiry_date = db.Column(db.String(50))
    credential_id = db.Column(db.String(255))
    credential_url = db.Column(db.Text)
    image = db.Column(db.Text)
    sort_order = db.Column(db.Integer, default=0, nullable=False)

    def __repr__(self):
        return f'<Certification {self.name}>'
