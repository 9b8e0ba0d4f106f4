"""Dedicated chat server: clients, events, dispatcher, commands and networking."""