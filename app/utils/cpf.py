def clean_cpf(cpf: str) -> str:
    """Strip CPF formatting, keeping only the digits"""
    if not cpf:
        return ""
    return "".join(filter(str.isdigit, cpf))
