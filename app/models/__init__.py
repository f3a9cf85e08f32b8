from .membresia import Membresia, MembresiaUsuario
from .pago import Pago
from .usuario import Rol, Usuario
