"""Example guest programs: Fibonacci, SHA-256 chain, Fibonacci composition and Schnorr."""