"""
Field definitions for portfolio content.

Both content backends and the route layer read the same definitions, so the
create defaults, patch rules, ordering and column caps stay identical
whichever store is active.
"""

from datetime import datetime, timezone

from portfolio.errors import ValidationError

STRING = 'string'
TEXT = 'text'
INTEGER = 'integer'
FLAG = 'flag'

# Bookkeeping keys a client can never patch
PROTECTED_FIELDS = ('id', 'created_at', 'updated_at')


def utcnow():
    """Naive UTC now, matching what the relational columns store."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def format_timestamp(value):
    """Serialize a datetime as an ISO-8601 UTC string with millisecond precision."""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.isoformat(timespec='milliseconds') + 'Z'


def to_wire_flag(value):
    return 1 if value else 0


class Field:
    """A single named field with its storage kind, default and column limits."""

    def __init__(self, name, kind=STRING, default='', max_length=255):
        self.name = name
        self.kind = kind
        self.default = default
        self.max_length = max_length if kind == STRING else None
        # Signed 32-bit, the range of an Integer column
        self.int_range = (-2 ** 31, 2 ** 31 - 1) if kind == INTEGER else None

    def coerce(self, value):
        """Convert an incoming JSON value to this field's Python type."""
        if isinstance(value, (list, dict)):
            raise ValidationError(f'{self.name} must be a single value')
        if self.kind == FLAG:
            if isinstance(value, str):
                return value.strip().lower() not in ('', '0', 'false', 'no', 'off')
            return bool(value)
        if self.kind == INTEGER:
            if isinstance(value, bool):
                return int(value)
            try:
                return int(value)
            except (TypeError, ValueError, OverflowError):
                raise ValidationError(f'{self.name} must be an integer')
        if isinstance(value, str):
            return value
        return str(value)

    def to_wire(self, value):
        if self.kind == FLAG:
            return to_wire_flag(value)
        return value


class Entity:
    """Shared behaviour of collections and singletons: known fields and patches."""

    def __init__(self, name, label, fields):
        self.name = name
        self.label = label
        self.fields = {f.name: f for f in fields}

    def patch(self, payload):
        """Build a patch from a request body.

        Only known fields whose value is not ``None`` are kept, so a partial
        update never blanks a field the client did not send.
        """
        patch = {}
        for key, value in (payload or {}).items():
            if key in PROTECTED_FIELDS or key not in self.fields or value is None:
                continue
            patch[key] = self.fields[key].coerce(value)
        return patch

    def check_limits(self, values):
        """Raise ValidationError for strings longer than their column and
        integers outside its range."""
        for key, value in values.items():
            field = self.fields.get(key)
            if field is None:
                continue
            if field.max_length is not None and isinstance(value, str) \
                    and len(value) > field.max_length:
                raise ValidationError(f'{key} must be at most {field.max_length} characters')
            if field.int_range is not None and isinstance(value, int):
                low, high = field.int_range
                if not low <= value <= high:
                    raise ValidationError(f'{key} must be between {low} and {high}')

    def to_wire(self, record):
        """Flags as 0/1; everything else unchanged."""
        out = dict(record)
        for key, field in self.fields.items():
            if key in out:
                out[key] = field.to_wire(out[key])
        return out


class Singleton(Entity):
    """An entity with exactly one persisted row."""

    def __init__(self, name, label, fields, seed):
        super().__init__(name, label, fields)
        self.seed = seed

    def defaults(self):
        values = {key: field.default for key, field in self.fields.items()}
        values.update(self.seed)
        return values


class Collection(Entity):
    """An ordered collection of records addressed by integer id."""

    def __init__(self, name, label, fields, required, required_message, order_by):
        super().__init__(name, label, fields)
        self.required = required
        self.required_message = required_message
        # Sequence of (field, descending) pairs; id is the final tie-break
        self.order_by = order_by

    def build(self, payload):
        """Build a new record from a request body.

        Required fields must be present and non-empty. Missing or empty
        optional fields fall back to their defaults.
        """
        payload = payload or {}
        for key in self.required:
            value = payload.get(key)
            if value is None or (isinstance(value, str) and not value.strip()):
                raise ValidationError(self.required_message)

        record = {}
        for key, field in self.fields.items():
            value = payload.get(key)
            if value is None or value == '':
                record[key] = field.default
            else:
                record[key] = field.coerce(value)
        return record

    def sort_key(self, record):
        key = []
        for name, descending in self.order_by:
            value = record.get(name)
            if self.fields[name].kind in (FLAG, INTEGER):
                value = int(value or 0)
                key.append(-value if descending else value)
            else:
                key.append(value or '')
        key.append(record.get('id') or 0)
        return tuple(key)

    def not_found_message(self):
        return f'{self.label} not found'


def _sortable():
    return Field('sort_order', INTEGER, default=0)


EDUCATION = Collection(
    'education', 'Education',
    [
        Field('institution'),
        Field('degree'),
        Field('field'),
        Field('start_year', max_length=20),
        Field('end_year', max_length=20),
        Field('gpa', max_length=20),
        Field('description', TEXT),
        Field('logo', TEXT),
        Field('is_current', FLAG, default=False),
        _sortable(),
    ],
    required=('institution', 'degree'),
    required_message='Institution and degree are required',
    order_by=(('sort_order', False),),
)

EXPERIENCE = Collection(
    'experience', 'Experience',
    [
        Field('company'),
        Field('position'),
        Field('location'),
        Field('start_date', max_length=50),
        Field('end_date', max_length=50),
        Field('description', TEXT),
        Field('achievements', TEXT),
        Field('logo', TEXT),
        Field('is_current', FLAG, default=False),
        _sortable(),
    ],
    required=('company', 'position'),
    required_message='Company and position are required',
    order_by=(('sort_order', False),),
)

PROJECTS = Collection(
    'projects', 'Project',
    [
        Field('title'),
        Field('description', TEXT),
        Field('category', max_length=100),
        Field('technologies', TEXT),
        Field('image', TEXT),
        Field('link', TEXT),
        Field('github_link', TEXT),
        Field('featured', FLAG, default=False),
        _sortable(),
    ],
    required=('title',),
    required_message='Title is required',
    order_by=(('featured', True), ('sort_order', False)),
)

SKILLS = Collection(
    'skills', 'Skill',
    [
        Field('name'),
        Field('category', default='technical', max_length=50),
        Field('level', INTEGER, default=50),
        Field('icon'),
        _sortable(),
    ],
    required=('name',),
    required_message='Name is required',
    order_by=(('category', False), ('sort_order', False)),
)

CERTIFICATIONS = Collection(
    'certifications', 'Certification',
    [
        Field('name'),
        Field('issuer'),
        Field('date', max_length=50),
        Field('expiry_date', max_length=50),
        Field('credential_id'),
        Field('credential_url', TEXT),
        Field('image', TEXT),
        _sortable(),
    ],
    required=('name',),
    required_message='Name is required',
    order_by=(('sort_order', False),),
)

PERSONAL_INFO = Singleton(
    'personal_info', 'Personal info',
    [
        Field('full_name'),
        Field('title'),
        Field('subtitle'),
        Field('bio', TEXT),
        Field('profile_image', TEXT),
        Field('resume_file', TEXT),
    ],
    seed={
        'full_name': 'Your Name',
        'title': 'Modern Management Professional',
        'subtitle': 'Business Administration, Modern Management',
        'bio': 'A short introduction about yourself, your interests and your goals.',
    },
)

CONTACT_INFO = Singleton(
    'contact_info', 'Contact info',
    [
        Field('email'),
        Field('phone', max_length=50),
        Field('address', TEXT),
        Field('linkedin'),
        Field('github'),
        Field('facebook'),
        Field('instagram'),
        Field('twitter'),
        Field('website'),
    ],
    seed={
        'email': 'email@example.com',
        'phone': '0xx-xxx-xxxx',
    },
)

SITE_SETTINGS = Singleton(
    'site_settings', 'Site settings',
    [
        Field('site_title'),
        Field('meta_description', TEXT),
        Field('favicon_url', TEXT),
        Field('primary_color', max_length=20),
        Field('secondary_color', max_length=20),
        Field('show_experience', FLAG, default=True),
        Field('show_projects', FLAG, default=True),
        Field('show_skills', FLAG, default=True),
        Field('show_certifications', FLAG, default=True),
    ],
    seed={
        'site_title': 'Business Portfolio',
        'meta_description': 'Professional Portfolio for Modern Management',
        'primary_color': '#00d4ff',
        'secondary_color': '#7c3aed',
    },
)

COLLECTIONS = {c.name: c for c in (EDUCATION, EXPERIENCE, PROJECTS, SKILLS, CERTIFICATIONS)}
SINGLETONS = {s.name: s for s in (PERSONAL_INFO, CONTACT_INFO, SITE_SETTINGS)}


def get_collection(name):
    try:
        return COLLECTIONS[name]
    except KeyError:
        raise KeyError(f'Unknown collection: {name}') from None


def get_singleton(name):
    try:
        return SINGLETONS[name]
    except KeyError:
        raise KeyError(f'Unknown singleton: {name}') from None
