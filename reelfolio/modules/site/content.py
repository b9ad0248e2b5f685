"""Static copy for the marketing sections."""

SECTIONS = ('Home', 'Showreel', 'Projects', 'About', 'Contact')

# Order shown in the header navigation
NAV_LINKS = ('Home', 'About', 'Showreel', 'Projects', 'Contact')

SHOWREEL_BLURB = (
    'A collection of selected works showcasing a range of styles and techniques '
    'in narrative, commercial, and documentary filmmaking.'
)

PROJECTS_BLURB = (
    'A curated selection of films, music videos, and commercials. Click on a project to watch.'
)

ABOUT_PARAGRAPHS = (
    'I am an award-winning filmmaker with a passion for visual storytelling. With a background '
    'in fine arts and a diploma in Videography from the prestigious Kenya Institute of Mass '
    'Communication, I bring a unique and painterly eye to every project.',
    'My work spans across production of narrative films, music videos, and high-end commercials, '
    'always with a focus on creating emotionally resonant and visually striking images. I believe '
    'that cinema is a powerful medium for empathy and understanding, and my creative vision is '
    'driven by a desire to explore the human condition in all its complexity.',
    "From the director's chair to behind the camera, I'm a collaborative and dedicated artist "
    'committed to bringing compelling stories to life. Based in Kenya, I draw inspiration from '
    'the vibrant landscapes and rich cultures of East Africa.',
)

CONTACT_BLURB = 'For collaborations, commissions, or inquiries'
