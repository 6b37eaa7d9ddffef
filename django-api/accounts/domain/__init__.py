from accounts.domain.models import BankAccount, Profile

__all__ = ["Profile", "BankAccount"]
