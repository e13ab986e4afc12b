from .security import (
    Tenant as Tenant,
    UserDirectory as UserDirectory,
    User as User,
    UserPasswordHistory as UserPasswordHistory,
    Group as Group,
    Role as Role,
    Function as Function,
    Token as Token,
    Policy as Policy,
    PasswordReset as PasswordReset,
)
