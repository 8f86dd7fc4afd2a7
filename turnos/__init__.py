"""Dashboard for a walk-in customer queueing system ("Sistema de Turnos")."""
