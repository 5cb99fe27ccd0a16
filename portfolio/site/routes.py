"""
Site Routes

The public page is rendered server-side from the same aggregate the API
serves. The admin pages are static shells driven by static/js/admin.js.
"""

from flask import abort, redirect, render_template, send_from_directory, url_for
from flask_login import current_user

from portfolio.api.files import get_file_store
from portfolio.services.files import LocalFileStore
from portfolio.site import site_bp
from portfolio.store import get_content_store


@site_bp.route('/')
def index():
    """Public portfolio page"""
    data = get_content_store().get_portfolio()
    skills_by_category = {}
    for skill in data['skills']:
        skills_by_category.setdefault(skill.get('category') or 'other', []).append(skill)
    project_categories = sorted({p['category'] for p in data['projects'] if p.get('category')})

    return render_template('index.html',
                         personal=data['personalInfo'],
                         education=data['education'],
                         experience=data['experience'],
                         projects=data['projects'],
                         project_categories=project_categories,
                         skills_by_category=skills_by_category,
                         certifications=data['certifications'],
                         contact=data['contact'],
                         settings=data['settings'])


@site_bp.route('/admin')
@site_bp.route('/admin/')
def admin_index():
    if current_user.is_authenticated:
        return redirect(url_for('site.admin_dashboard'))
    return redirect(url_for('site.admin_login'))


@site_bp.route('/admin/login')
def admin_login():
    """Admin login page; the form posts to /api/auth/login"""
    if current_user.is_authenticated:
        return redirect(url_for('site.admin_dashboard'))
    settings = get_content_store().get_site_settings()
    return render_template('admin/login.html', settings=settings)


@site_bp.route('/admin/dashboard')
def admin_dashboard():
    """Admin panel shell; the script checks the session on load"""
    if not current_user.is_authenticated:
        return redirect(url_for('site.admin_login'))
    settings = get_content_store().get_site_settings()
    return render_template('admin/dashboard.html', settings=settings, username=current_user.username)


@site_bp.route('/uploads/<path:filename>')
def uploaded_file(filename):
    """Serve files kept by the local file store"""
    store = get_file_store()
    if not isinstance(store, LocalFileStore):
        abort(404)
    return send_from_directory(store.folder, filename)
