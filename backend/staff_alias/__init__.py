"""Staff alias posting backend: alias authorization, substitution, and audit."""
