from django.dispatch import Signal

dream_persisted = Signal()  # sender=Dream, dream=DreamRecord, session_id=str
