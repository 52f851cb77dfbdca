"""
QR code generation service
"""

import io
import qrcode

from invite_core.services.invite_service import invite_url

class QRService:
    """Service for generating QR codes"""

    @staticmethod
    def generate_invite_qr(token: str, format: str = 'PNG') -> bytes:
        """Generate QR code pointing at a guest's invitation"""
        qr = qrcode.QRCode(
            version=1,
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=10,
            border=4,
        )
        qr.add_data(invite_url(token))
        qr.make(fit=True)

        # Create QR code image
        img = qr.make_image(fill_color="black", back_color="white")

        # Convert to bytes
        buffer = io.BytesIO()
        img.save(buffer, format=format)

        return buffer.getvalue()
