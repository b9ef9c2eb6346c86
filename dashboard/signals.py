from django.dispatch import Signal

# Sent with user_id=<id> and channel=<name> when a user picker selects someone.
selected_user_changed = Signal()
