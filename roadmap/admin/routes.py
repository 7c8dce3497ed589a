"""
Admin Routes

Pages are protected by `admin_required`; the session flag set at login is
only a hint that `has_admin_access` confirms on every request.
"""

from flask import render_template, request, redirect, url_for, flash, session, jsonify
from flask_login import login_user, logout_user

from roadmap.admin import admin_bp
from roadmap.admin.guard import admin_required, has_admin_access, SessionCache
from roadmap.models import AdminUser
from roadmap.services import CATEGORY, FIELD_TYPE, SETTING, get_resource_service


@admin_bp.route('/login', methods=['GET', 'POST'])
def login():
    """Admin login page."""
    if SessionCache().read():
        return redirect(url_for('admin.dashboard'))

    if request.method == 'POST':
        email = request.form.get('email', '').strip().lower()
        password = request.form.get('password', '')

        if not email or not password:
            flash('Please enter both email and password.', 'danger')
            return render_template('admin/login.html'), 400

        user = AdminUser.query.filter_by(email=email).first()
        if user and user.is_admin and user.is_active and user.check_password(password):
            session.clear()
            login_user(user)
            SessionCache().write(True)
            flash('Welcome, Administrator!', 'success')
            return redirect(url_for('admin.dashboard'))

        flash('Invalid email or password.', 'danger')
        return render_template('admin/login.html'), 401

    return render_template('admin/login.html')


@admin_bp.route('/logout')
def logout():
    """Admin logout - clears entire session."""
    logout_user()
    session.clear()
    flash('You have been logged out of the admin panel.', 'info')
    return redirect(url_for('admin.login'))


@admin_bp.route('/api/verify')
def verify():
    """Server-side confirmation of the admin session hint."""
    return jsonify(isAdmin=has_admin_access())


@admin_bp.route('/')
@admin_required
def dashboard():
    """Admin dashboard listing every resource kind."""
    service = get_resource_service()
    sections = []
    for kind in (CATEGORY, FIELD_TYPE, SETTING):
        result = service.list_all(kind)
        if not result.ok:
            flash(f'Could not load {kind.name} list: {result.error.message}', 'danger')
        sections.append({'kind': kind, 'items': result.value or []})
    return render_template('admin/dashboard.html', sections=sections)


def _create_form(kind, template, fields):
    if request.method == 'POST':
        data = {name: request.form.get(name, '').strip() for name in fields}
        result = get_resource_service().create(kind, data)
        if result.ok:
            flash(f'{kind.name} created successfully.', 'success')
            return redirect(url_for('admin.dashboard'))
        flash(result.error.message, 'danger')
        return render_template(template, kind=kind, fields=fields, values=data), result.status
    return render_template(template, kind=kind, fields=fields, values={})


@admin_bp.route('/categories/new', methods=['GET', 'POST'])
@admin_required
def new_category():
    return _create_form(CATEGORY, 'admin/resource_form.html', ('name', 'color', 'icon'))


@admin_bp.route('/fieldTypes/new', methods=['GET', 'POST'])
@admin_required
def new_field_type():
    return _create_form(FIELD_TYPE, 'admin/resource_form.html', ('name', 'type', 'description'))


@admin_bp.route('/settings/new', methods=['GET', 'POST'])
@admin_required
def new_setting():
    return _create_form(SETTING, 'admin/resource_form.html', ('key', 'value', 'description'))
