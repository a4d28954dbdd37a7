"""
Services: video export client and the render service.

render_server needs Flask and OpenCV; import each module directly.
"""
