"""User-facing replies and the Gemini context hint for MediBot."""

# ── Appointment flow ────────────────────────────────────────────────
ASK_FACILITY = "Hangi hastane için randevu almak istiyorsunuz?"
ASK_DEPARTMENT = "Hangi bölüm için randevu almak istiyorsunuz?"
ASK_DATETIME = "Hangi tarih ve saatte randevu almak istiyorsunuz?"

CONFIRMATION_TEMPLATE = (
    "✅ Onay: {facility} hastanesi, {department} bölümü için {datetime} "
    "tarihine randevu talebiniz alındı. Onaylıyor musunuz? (evet/hayır)"
)

CANCELLED_REPLY = "Randevu işlemi iptal edildi."
BOOKED_REPLY = "Randevunuz başarıyla oluşturuldu!"

# ── Adapters ────────────────────────────────────────────────────────
GENERIC_FAILURE_REPLY = "Üzgünüm, bir sorun oluştu. Lütfen tekrar deneyin."
GOODBYE_REPLY = "Görüşmek üzere!"

# ── Gemini fallback ─────────────────────────────────────────────────
NOT_UNDERSTOOD_REPLY = "🤖 Anlayamadım, lütfen başka şekilde ifade edin."
GEMINI_QUOTA_REPLY = (
    "🤖 Üzgünüm, şu an çok fazla talep alıyorum. "
    "Lütfen biraz sonra tekrar deneyin (Kota Aşıldı)."
)
GEMINI_INVALID_KEY_REPLY = (
    "🤖 API anahtarımda bir sorun var. "
    "Lütfen geliştiriciye bildirin (Geçersiz API Anahtarı)."
)
GEMINI_SERVICE_ERROR_TEMPLATE = "🤖 Gemini ile iletişimde bir sorun oluştu: {message}"
GEMINI_CONNECTION_REPLY = (
    "🤖 Üzgünüm, şu anda Gemini ile bağlantı kuramıyorum. "
    "Lütfen internet bağlantınızı kontrol edin veya daha sonra tekrar deneyin."
)

FALLBACK_INTENT_THRESHOLD = 0.5


def confirmation_message(facility: str, department: str, datetime: str) -> str:
    return CONFIRMATION_TEMPLATE.format(
        facility=facility, department=department, datetime=datetime,
    )


def build_fallback_hint(
    message: str,
    intent: str | None,
    confidence: float,
    booking_intent: str,
) -> str:
    """Build the context line sent to Gemini ahead of the user's message.

    The classifier's intent is mentioned only when it is something other
    than the booking intent and scored above ``FALLBACK_INTENT_THRESHOLD``.
    """
    hint = f'Kullanıcının mesajı: "{message}".'
    if intent and intent != booking_intent and confidence > FALLBACK_INTENT_THRESHOLD:
        hint += f' Wit.ai bunu "{intent}" niyeti olarak algıladı.'
    else:
        hint += " Wit.ai belirli bir niyet belirleyemedi veya randevu akışına girilmedi."
    hint += " Lütfen doğal ve sohbetvari bir şekilde yanıt verin."
    return hint
