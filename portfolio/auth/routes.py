"""
Auth Routes

Admin authentication routes using Flask-Login.
"""

from flask import jsonify, request
from flask_login import login_required

from portfolio.auth import auth_bp
from portfolio import services


@auth_bp.route('/login', methods=['POST'])
def login():
    """Admin login route"""
    data = request.get_json(silent=True) or {}
    user = services.login(data.get('username'), data.get('password'))
    return jsonify({
        'success': True,
        'message': 'Login successful',
        'user': user.to_dict(),
    })


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """Admin logout route"""
    services.logout()
    return jsonify({'success': True, 'message': 'Logged out successfully'})


@auth_bp.route('/check')
def check():
    """Report whether the request carries an admin session"""
    authenticated, user = services.check_auth()
    if not authenticated:
        return jsonify({'authenticated': False})
    return jsonify({'authenticated': True, 'user': user.to_dict()})


@auth_bp.route('/password', methods=['PUT'])
@login_required
def change_password():
    """Change the admin password"""
    data = request.get_json(silent=True) or {}
    services.change_password(data.get('currentPassword'), data.get('newPassword'))
    return jsonify({'success': True, 'message': 'Password changed successfully'})
