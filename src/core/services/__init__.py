"""Servicios del core: orquestación que no es dominio ni I/O."""
