"""Product-grounded sales chatbot web app."""
