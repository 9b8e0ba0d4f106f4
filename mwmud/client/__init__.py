"""Client core: events, dispatcher, chat commands, UI elements, screens, network and game state."""