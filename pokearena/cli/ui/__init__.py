"""Rich displays and interactive menus."""
