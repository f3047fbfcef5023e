"""MoneyMentor investment growth simulator backend."""
