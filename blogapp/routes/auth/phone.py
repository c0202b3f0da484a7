"""Phone-verified registration routes: send and verify OTP."""

from flask import render_template, redirect, url_for, jsonify, current_app
from blogapp import limiter
from blogapp.routes.auth import auth_bp
from blogapp.services.authenticators import OtpAuthenticator
from blogapp.utils import form_data


@auth_bp.route('/send-otp', methods=['POST'])
@limiter.limit("3 per minute")
def send_otp():
    """Send a verification code to the phone and hold the pending account."""
    data = form_data()
    challenge = OtpAuthenticator().start(
        data.get('phone'), data.get('username'), data.get('password')
    )
    current_app.logger.info(f"Verification code sent to {challenge.phone}")
    return redirect(url_for('auth.verify_otp_form', phone=challenge.phone))


@auth_bp.route('/verify-otp', methods=['GET'])
def verify_otp_form():
    return render_template('verify_otp.html', title='Verify Phone')


@auth_bp.route('/verify-otp', methods=['POST'])
@limiter.limit("5 per minute")
def verify_otp():
    """Redeem a verification code and create the account."""
    data = form_data()
    user = OtpAuthenticator().resolve(data.get('phone'), data.get('otp'))
    return jsonify({
        'message': 'Phone verified, account created',
        'user': user.to_dict()
    }), 200
